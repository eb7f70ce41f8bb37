"""Form validation — required fields, trigger rules, and contact details.

:func:`validate_form` is a pure function: it reads the schema, answers,
and message table and returns an error map.  All rules are evaluated
independently, so the caller sees every problem at once rather than the
first one.

Error map keys:
  - question id — a required question was left empty
  - ``<question_id>_additional`` — a trigger rule fired and its
    elaboration text is blank
  - ``contact_username`` — the contact username is blank
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Sequence

from questionnaire_forms.constants import CONTACT_USERNAME_KEY
from questionnaire_forms.evaluator import TriggerEvaluator
from questionnaire_forms.models.form import (
    ContactData,
    FormAdditionalData,
    FormData,
    FormErrors,
)
from questionnaire_forms.models.rule import TriggerRule
from questionnaire_forms.models.schema import (
    DEFAULT_MESSAGES,
    Messages,
    MessageTable,
    Question,
    Section,
)

_evaluator = TriggerEvaluator()


def is_blank(value) -> bool:
    """True for None, non-strings, and whitespace-only strings."""
    return not isinstance(value, str) or value.strip() == ""


# Numeric text accepted by the browser form: decimal with optional exponent,
# Infinity, or an unsigned 0x/0o/0b literal.  Underscores and "inf"/"nan"
# spellings that float() would take are not numbers there.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")
_RADIX = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def is_number(value) -> bool:
    """True if ``value`` is a number or numeric text (NaN does not count)."""
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(_DECIMAL.fullmatch(text) or _RADIX.fullmatch(text))


def _question_error(question: Question, value, t: Messages) -> Optional[str]:
    """Return the error message for an empty required question, else None."""
    if question.type == "checkbox":
        if not isinstance(value, list) or len(value) == 0:
            return t.select_at_least_one
    elif question.type == "number":
        if not is_number(value):
            return t.required
    elif is_blank(value):
        return t.required
    return None


def validate_form(
    sections: Sequence[Section],
    form_data: FormData,
    contact_data: ContactData,
    lang: str,
    additional_data: Optional[FormAdditionalData] = None,
    rules: Iterable[TriggerRule] = (),
    messages: MessageTable = DEFAULT_MESSAGES,
) -> FormErrors:
    """Validate a filled form and return ``{field_key: message}``.

    Args:
        sections: questionnaire schema in display order
        form_data: answers keyed by question id
        contact_data: the respondent's contact details
        lang: language tag used to pick error messages
        additional_data: elaboration texts; trigger rules are only checked
            when this is provided
        rules: trigger rules declared for this questionnaire
        messages: localized message table

    Returns:
        An empty dict when the form is valid.
    """
    errors: FormErrors = {}
    t = messages.for_language(lang)

    # --- Required questions ---
    for section in sections:
        for question in section.questions:
            if not question.required:
                continue
            message = _question_error(question, form_data.get(question.id), t)
            if message is not None:
                errors[question.id] = message

    # --- Trigger rules: elaboration text required when the rule fires ---
    if additional_data is not None:
        for rule in _evaluator.fired(rules, form_data):
            if is_blank(additional_data.get(rule.additional_key)):
                errors[rule.additional_key] = t.required

    # --- Contact ---
    if is_blank(contact_data.username):
        errors[CONTACT_USERNAME_KEY] = t.required

    return errors
