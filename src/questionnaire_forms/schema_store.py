"""SchemaStore — loads questionnaire schemas from ``v1/`` into typed models.

This is the single source of truth for questionnaire definitions at
runtime.  The store is loaded once at startup; schemas are frozen models
and are shared by every request.

Layout::

    v1/
      questionnaires/
        infant.yaml     # {sections: [...], rules: [...]}
        child.yaml
        woman.yaml
        man.yaml
      messages.yaml     # optional {lang: {key: text}} overrides

Usage::

    store = SchemaStore()           # defaults to v1/ relative to repo root
    store.load()

    sections = store.get_sections("woman")
    rules = store.get_rules("woman")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from questionnaire_forms.constants import QUESTIONNAIRE_TYPES
from questionnaire_forms.errors import QuestionnaireNotFound
from questionnaire_forms.models.rule import TriggerRule
from questionnaire_forms.models.schema import DEFAULT_MESSAGES, MessageTable, Section

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# SchemaStore
# ---------------------------------------------------------------------------

class SchemaStore:
    """Loads questionnaire YAML and provides typed lookup.

    Attributes populated after :meth:`load`:

        sections  — dict[type, list[Section]]
        rules     — dict[type, list[TriggerRule]]
        messages  — MessageTable (built-in defaults plus messages.yaml overrides)
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        if data_dir is None:
            data_dir = find_repo_root() / "v1"
        self._base = Path(data_dir)

        # Populated by load()
        self.sections: dict[str, list[Section]] = {}
        self.rules: dict[str, list[TriggerRule]] = {}
        self.messages: MessageTable = DEFAULT_MESSAGES

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse every questionnaire file and the optional message overrides.

        Raises ``FileNotFoundError`` if a questionnaire file is missing and
        ``ValueError`` (pydantic ``ValidationError``) on malformed content.
        """
        for qtype in QUESTIONNAIRE_TYPES:
            self._load_questionnaire(qtype)
        self._load_messages()
        logger.info(
            "SchemaStore loaded: %d questionnaires, %d languages",
            len(self.sections),
            len(self.messages.languages),
        )

    def _load_questionnaire(self, qtype: str) -> None:
        raw = load_yaml(self._base / "questionnaires" / f"{qtype}.yaml")
        if not isinstance(raw, dict) or "sections" not in raw:
            raise ValueError(f"Questionnaire '{qtype}' has no sections")

        sections = [Section(**s) for s in raw["sections"]]
        rules = [TriggerRule(**r) for r in raw.get("rules") or []]

        # Rules must point at questions that exist in this questionnaire
        known = {q.id for s in sections for q in s.questions}
        for rule in rules:
            if rule.question_id not in known:
                raise ValueError(
                    f"Trigger rule in '{qtype}' references unknown question '{rule.question_id}'"
                )

        self.sections[qtype] = sections
        self.rules[qtype] = rules

    def _load_messages(self) -> None:
        path = self._base / "messages.yaml"
        if not path.exists():
            return
        overrides = load_yaml(path) or {}
        self.messages = DEFAULT_MESSAGES.merged(overrides)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_sections(self, questionnaire_type: str) -> list[Section]:
        """Return the sections for a questionnaire type.

        Raises:
            QuestionnaireNotFound: if the type is unknown.
        """
        try:
            return self.sections[questionnaire_type]
        except KeyError:
            raise QuestionnaireNotFound(questionnaire_type) from None

    def get_rules(self, questionnaire_type: str) -> list[TriggerRule]:
        """Return the trigger rules for a questionnaire type (may be empty)."""
        return self.rules.get(questionnaire_type, [])

    def has_language(self, lang: str) -> bool:
        return lang in self.messages.languages
