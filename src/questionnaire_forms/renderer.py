"""ReportRenderer — turns a filled questionnaire into the text report.

The report is what the clinic receives in Telegram.  Rendering happens in
two steps:

  1. A fold over the schema builds a view model: for each section, the
     questions that were actually answered, their formatted answers, and
     their number (if any).
  2. The Jinja2 template ``report.md.jinja2`` lays the view model out as
     text with banners, dividers, and the contact block.

Numbering: questions are unnumbered up to and including the ``health``
section; every answered question in a later section gets the next number,
starting from 1.

Rendering is deterministic and side-effect free; the same inputs always
produce byte-identical output.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import NamedTuple, Optional, Sequence

import jinja2
from pydantic import BaseModel

from questionnaire_forms.constants import (
    BANNER_CHAR,
    CONTACT_LINK_BASES,
    DIVIDER_CHAR,
    NUMBERING_SECTION_ID,
    RULE_WIDTH,
)
from questionnaire_forms.models.form import (
    ContactData,
    FormAdditionalData,
    FormData,
)
from questionnaire_forms.models.schema import (
    DEFAULT_MESSAGES,
    MessageTable,
    Question,
    Section,
    additional_key,
    localize,
)

REPORT_TEMPLATE = "report.md.jinja2"


# ---------------------------------------------------------------------------
# View model
# ---------------------------------------------------------------------------

class ReportEntry(BaseModel):
    """One answered question as it appears in the report."""

    number: Optional[int] = None
    label: str
    answer: str
    additional: Optional[str] = None


class ReportSection(BaseModel):
    title: str
    entries: list[ReportEntry]


class _Numbering(NamedTuple):
    """Fold accumulator: whether numbering has begun and the last number used."""

    started: bool = False
    counter: int = 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def has_answer(value) -> bool:
    """True for a non-empty list or a non-blank string."""
    if isinstance(value, list):
        return len(value) > 0
    return isinstance(value, str) and value.strip() != ""


def format_answer(question: Question, value, lang: str) -> str:
    """Format an answer for display.

    Checkbox answers become their option labels joined with ", " in the
    order the user picked them; radio answers become their option label.
    Unknown option values fall back to the raw stored value.
    """
    if isinstance(value, list):
        return ", ".join(question.option_label(v, lang) for v in value)
    if question.options:
        return question.option_label(value, lang)
    return value


def clean_username(username: str) -> str:
    """Drop a single leading "@" and surrounding whitespace."""
    if username.startswith("@"):
        username = username[1:]
    return username.strip()


def contact_link(contact: ContactData) -> str:
    """Profile URL for the contact on its messaging network."""
    return CONTACT_LINK_BASES[contact.method] + clean_username(contact.username)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class ReportRenderer:
    """Jinja2-based report renderer.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
        messages: localized message table for banners and field labels.
    """

    def __init__(
        self,
        template_dir: Path | None = None,
        messages: MessageTable = DEFAULT_MESSAGES,
    ) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            # The report always ends with a newline after the closing banner
            keep_trailing_newline=True,
        )
        self._messages = messages

    def render(
        self,
        questionnaire_type: str,
        sections: Sequence[Section],
        form_data: FormData,
        additional_data: FormAdditionalData,
        contact_data: ContactData,
        lang: str,
    ) -> str:
        """Render the full report text."""
        t = self._messages.for_language(lang)
        template = self._env.get_template(REPORT_TEMPLATE)
        return template.render(
            banner=BANNER_CHAR * RULE_WIDTH,
            divider=DIVIDER_CHAR * RULE_WIDTH,
            title=t.report_title(questionnaire_type),
            sections=self.build_sections(sections, form_data, additional_data, lang),
            username=clean_username(contact_data.username),
            link=contact_link(contact_data),
            t=t,
        )

    def build_sections(
        self,
        sections: Sequence[Section],
        form_data: FormData,
        additional_data: FormAdditionalData,
        lang: str,
    ) -> list[ReportSection]:
        """Fold over the schema, numbering answered questions after ``health``."""
        state = _Numbering()
        built: list[ReportSection] = []
        for section in sections:
            report_section, state = self._build_section(
                section, state, form_data, additional_data, lang,
            )
            built.append(report_section)
        return built

    @staticmethod
    def _build_section(
        section: Section,
        state: _Numbering,
        form_data: FormData,
        additional_data: FormAdditionalData,
        lang: str,
    ) -> tuple[ReportSection, _Numbering]:
        is_marker = section.id == NUMBERING_SECTION_ID
        if is_marker:
            state = state._replace(started=True)
        numbered = state.started and not is_marker

        entries: list[ReportEntry] = []
        for question in section.questions:
            value = form_data.get(question.id)
            if not has_answer(value):
                continue

            number = None
            if numbered:
                state = state._replace(counter=state.counter + 1)
                number = state.counter

            extra = additional_data.get(additional_key(question.id))
            entries.append(ReportEntry(
                number=number,
                label=localize(question.label, lang),
                answer=format_answer(question, value, lang),
                additional=extra if has_answer(extra) else None,
            ))

        return ReportSection(title=localize(section.title, lang), entries=entries), state


@lru_cache(maxsize=1)
def _default_renderer() -> ReportRenderer:
    return ReportRenderer()


def render_report(
    questionnaire_type: str,
    sections: Sequence[Section],
    form_data: FormData,
    additional_data: FormAdditionalData,
    contact_data: ContactData,
    lang: str,
    messages: MessageTable | None = None,
) -> str:
    """Render a report with the packaged template.

    Convenience wrapper around :class:`ReportRenderer` for callers that
    don't need a custom template directory.
    """
    renderer = _default_renderer() if messages is None else ReportRenderer(messages=messages)
    return renderer.render(
        questionnaire_type, sections, form_data, additional_data, contact_data, lang,
    )
