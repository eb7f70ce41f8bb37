"""Exceptions raised by the SDK for requests it cannot serve.

All of them are ``LookupError``s: the caller asked for a questionnaire,
language, or draft that does not exist.  The HTTP service maps them to 404.
"""


class FormLookupError(LookupError):
    """Base class for unknown questionnaire types, languages, and drafts."""


class QuestionnaireNotFound(FormLookupError):
    def __init__(self, questionnaire_type: str) -> None:
        super().__init__(f"Questionnaire not found: {questionnaire_type}")
        self.questionnaire_type = questionnaire_type


class LanguageNotSupported(FormLookupError):
    def __init__(self, lang: str) -> None:
        super().__init__(f"Language not supported: {lang}")
        self.lang = lang


class DraftNotFound(FormLookupError):
    """No fresh draft is stored for the (type, language) pair."""

    def __init__(self, questionnaire_type: str, lang: str) -> None:
        super().__init__(f"Draft not found: {questionnaire_type}/{lang}")
        self.questionnaire_type = questionnaire_type
        self.lang = lang
