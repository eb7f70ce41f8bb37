"""Public model re-exports for questionnaire_forms.

Consumers should import from ``questionnaire_forms.models`` rather than
reaching into sub-modules directly.
"""

# --- Form state ---
from questionnaire_forms.models.form import (
    ContactData,
    Draft,
    DraftLoadResult,
    FormAdditionalData,
    FormData,
    FormErrors,
    FormState,
    SubmissionOutcome,
    SubmitErrorKind,
    SubmitResult,
)

# --- Trigger rules ---
from questionnaire_forms.models.rule import Predicate, TriggerRule

# --- Schema / messages ---
from questionnaire_forms.models.schema import (
    DEFAULT_MESSAGES,
    LocalizedText,
    Messages,
    MessageTable,
    Option,
    Question,
    QuestionType,
    Section,
    additional_key,
    localize,
)

__all__ = [
    # Form state
    "ContactData",
    "Draft",
    "DraftLoadResult",
    "FormAdditionalData",
    "FormData",
    "FormErrors",
    "FormState",
    "SubmissionOutcome",
    "SubmitErrorKind",
    "SubmitResult",
    # Rules
    "Predicate",
    "TriggerRule",
    # Schema
    "DEFAULT_MESSAGES",
    "LocalizedText",
    "Messages",
    "MessageTable",
    "Option",
    "Question",
    "QuestionType",
    "Section",
    "additional_key",
    "localize",
]
