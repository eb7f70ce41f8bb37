"""Pydantic models for questionnaire schemas and the localized message table.

These models mirror the YAML files in ``v1/questionnaires/``:

  Schema (one file per questionnaire type):
    - Section: ordered group of questions with a localized title
    - Question: a single form field (text, textarea, radio, checkbox, number)
    - Option: a selectable value with a localized label

  Messages:
    - Messages: every user-facing string the validator and renderer emit
    - MessageTable: Messages keyed by language tag, with a default fallback

Schema models are frozen — a loaded schema is shared across requests and
must never be mutated.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from questionnaire_forms.constants import (
    ADDITIONAL_SUFFIX,
    DEFAULT_LANGUAGE,
    QUESTIONNAIRE_TYPES,
)
from questionnaire_forms.errors import QuestionnaireNotFound

# Language tag -> text
LocalizedText = dict[str, str]

QuestionType = Literal["text", "textarea", "date", "radio", "checkbox", "number"]


def localize(text: LocalizedText, lang: str) -> str:
    """Pick the ``lang`` entry of a localized string.

    Falls back to the first available translation so a schema that is
    missing one language still renders something readable.
    """
    if lang in text:
        return text[lang]
    return next(iter(text.values()), "")


def additional_key(question_id: str) -> str:
    """Return the Additional-Text Map key for a question id."""
    return f"{question_id}{ADDITIONAL_SUFFIX}"


# ---------------------------------------------------------------------------
# Schema: v1/questionnaires/*.yaml
# ---------------------------------------------------------------------------

class Option(BaseModel):
    """A selectable option for radio/checkbox questions."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: LocalizedText


class Question(BaseModel):
    """A single form field.

    ``type`` drives both emptiness checks in the validator and answer
    formatting in the report:

      - text / textarea / date: free text, must be non-blank when required
      - radio: single choice, rendered via its option label
      - checkbox: multi choice, answer is a list of option values
      - number: must parse as a number when required

    ``has_additional`` marks questions whose UI shows an elaboration box;
    its text is stored under :func:`additional_key`.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType
    label: LocalizedText
    required: bool = False
    options: Optional[List[Option]] = None
    has_additional: bool = False

    @property
    def is_multi(self) -> bool:
        return self.type == "checkbox"

    def option_label(self, value: str, lang: str) -> str:
        """Label of the option carrying ``value``, or the raw value if none does."""
        for opt in self.options or []:
            if opt.value == value:
                return localize(opt.label, lang)
        return value


class Section(BaseModel):
    """Ordered group of questions shown under one heading."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: LocalizedText
    questions: List[Question]


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class Messages(BaseModel):
    """User-facing strings for one language."""

    required: str
    select_at_least_one: str
    md_infant: str
    md_child: str
    md_woman: str
    md_man: str
    md_contacts: str
    answer: str
    additional: str
    username: str
    link: str

    def report_title(self, questionnaire_type: str) -> str:
        """Banner title for a questionnaire type (e.g. ``md_woman``)."""
        if questionnaire_type not in QUESTIONNAIRE_TYPES:
            raise QuestionnaireNotFound(questionnaire_type)
        return getattr(self, f"md_{questionnaire_type}")


class MessageTable(BaseModel):
    """Messages keyed by language tag."""

    languages: dict[str, Messages]
    default_language: str = DEFAULT_LANGUAGE

    def for_language(self, lang: str) -> Messages:
        """Return the messages for ``lang``, falling back to the default language."""
        if lang in self.languages:
            return self.languages[lang]
        return self.languages[self.default_language]

    def merged(self, overrides: dict[str, dict]) -> "MessageTable":
        """Return a copy with per-language overrides applied on top."""
        languages = dict(self.languages)
        for lang, raw in overrides.items():
            base = languages.get(lang) or languages[self.default_language]
            languages[lang] = base.model_copy(update=raw)
        return MessageTable(languages=languages, default_language=self.default_language)


DEFAULT_MESSAGES = MessageTable(
    languages={
        "ru": Messages(
            required="Обязательное поле",
            select_at_least_one="Выберите хотя бы один вариант",
            md_infant="АНКЕТА ЗДОРОВЬЯ МЛАДЕНЦА",
            md_child="АНКЕТА ЗДОРОВЬЯ РЕБЁНКА",
            md_woman="АНКЕТА ЗДОРОВЬЯ ЖЕНЩИНЫ",
            md_man="АНКЕТА ЗДОРОВЬЯ МУЖЧИНЫ",
            md_contacts="КОНТАКТЫ",
            answer="Ответ",
            additional="Дополнительно",
            username="Имя пользователя",
            link="Ссылка",
        ),
        "en": Messages(
            required="This field is required",
            select_at_least_one="Please select at least one option",
            md_infant="INFANT HEALTH QUESTIONNAIRE",
            md_child="CHILD HEALTH QUESTIONNAIRE",
            md_woman="WOMAN HEALTH QUESTIONNAIRE",
            md_man="MAN HEALTH QUESTIONNAIRE",
            md_contacts="CONTACTS",
            answer="Answer",
            additional="Additional",
            username="Username",
            link="Link",
        ),
    },
)
