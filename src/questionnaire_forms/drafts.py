"""DraftStore — best-effort persistence of in-progress questionnaires.

Drafts are stored as JSON under ``health_questionnaire_<type>_<lang>``::

    {"formData": {...}, "additionalData": {...},
     "contactData": {"method": "telegram", "username": "..."},
     "timestamp": 1718000000000}

A draft older than the TTL (24 hours by default) is treated as absent and
is deleted from storage when it is next read; so is an unparseable entry.
Persistence is best-effort: storage and (de)serialization failures are
logged and never raised to the caller.

Usage::

    drafts = DraftStore(FileStorage("/var/lib/questionnaire/drafts"))
    drafts.save("woman", "ru", form_data, additional_data, contact)
    draft = drafts.load("woman", "ru")      # Draft | None
    drafts.clear("woman", "ru")
"""

from __future__ import annotations

import json
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from questionnaire_forms.constants import DRAFT_TTL_MS, STORAGE_KEY_PREFIX
from questionnaire_forms.models.form import (
    ContactData,
    Draft,
    DraftLoadResult,
    FormAdditionalData,
    FormData,
)
from questionnaire_forms.storage import DraftStorage, InMemoryStorage

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def storage_key(questionnaire_type: str, lang: str) -> str:
    """Storage key for a (type, language) pair."""
    return f"{STORAGE_KEY_PREFIX}_{questionnaire_type}_{lang}"


class DraftStore:
    """Saves, restores, and clears drafts on a :class:`DraftStorage`.

    Args:
        storage: backend to read/write; defaults to in-memory
        clock: returns the current epoch milliseconds (injectable for tests)
        ttl_ms: drafts at least this old are considered expired
    """

    def __init__(
        self,
        storage: DraftStorage | None = None,
        clock: Clock = now_ms,
        ttl_ms: int = DRAFT_TTL_MS,
    ) -> None:
        self._storage = storage if storage is not None else InMemoryStorage()
        self._clock = clock
        self._ttl_ms = ttl_ms

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(
        self,
        questionnaire_type: str,
        lang: str,
        form_data: FormData,
        additional_data: FormAdditionalData,
        contact_data: ContactData,
    ) -> bool:
        """Persist a draft stamped with the current time, replacing any previous one.

        Returns True if the draft was written, False if storage failed.
        """
        key = storage_key(questionnaire_type, lang)
        try:
            draft = Draft(
                form_data=form_data,
                additional_data=additional_data,
                contact_data=contact_data,
                timestamp=self._clock(),
            )
            self._storage.set_item(key, json.dumps(draft.to_storage(), ensure_ascii=False))
        except Exception:
            logger.exception("Error saving form data for %s", key)
            return False
        return True

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load_result(self, questionnaire_type: str, lang: str) -> DraftLoadResult:
        """Restore a draft and report why nothing came back, if nothing did."""
        key = storage_key(questionnaire_type, lang)
        try:
            stored = self._storage.get_item(key)
        except Exception:
            logger.exception("Error loading form data for %s", key)
            return DraftLoadResult(status="corrupt")

        if not stored:
            return DraftLoadResult(status="missing")

        try:
            draft = Draft.from_storage(json.loads(stored))
        except (ValueError, TypeError, KeyError, AttributeError, ValidationError):
            logger.exception("Error loading form data for %s", key)
            self._discard(key)
            return DraftLoadResult(status="corrupt")

        age = self._clock() - draft.timestamp
        if age >= self._ttl_ms:
            logger.info("Draft %s expired (age %d ms)", key, age)
            self._discard(key)
            return DraftLoadResult(status="expired")

        return DraftLoadResult(status="found", draft=draft)

    def load(self, questionnaire_type: str, lang: str) -> Optional[Draft]:
        """Return the stored draft if it is fresh, otherwise None."""
        return self.load_result(questionnaire_type, lang).draft

    # ------------------------------------------------------------------
    # Clear
    # ------------------------------------------------------------------

    def clear(self, questionnaire_type: str, lang: str) -> None:
        """Remove the stored draft; missing drafts and storage errors are ignored."""
        self._discard(storage_key(questionnaire_type, lang))

    def _discard(self, key: str) -> None:
        try:
            self._storage.remove_item(key)
        except Exception:
            logger.exception("Error clearing form data for %s", key)
