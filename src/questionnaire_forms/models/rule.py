"""Trigger rule models — conditional completeness checks.

A trigger rule says: "when the answer to ``question_id`` satisfies
``when``, the elaboration field ``additional_key`` must carry text".  Rules
are declared next to the schema in ``v1/questionnaires/<type>.yaml``::

    rules:
      - question_id: operations
        when: {op: eq, value: "yes"}
        additional_key: operations_additional
      - question_id: injuries
        when: {op: contains_other_than, value: no_issues}
        additional_key: injuries_additional

``additional_key`` defaults to ``<question_id>_additional`` when omitted.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from questionnaire_forms.models.schema import additional_key


class Predicate(BaseModel):
    """A single condition on one answer.

    Operators:
      - eq, ne: equality / inequality against a scalar answer
      - contains: ``value`` is one of the selected values
      - contains_any: any of ``value`` (a list) is selected
      - contains_other_than: something other than ``value`` is selected
    """

    model_config = ConfigDict(frozen=True)

    op: Literal["eq", "ne", "contains", "contains_any", "contains_other_than"]
    value: Any


class TriggerRule(BaseModel):
    """Require ``additional_key`` text when ``when`` holds for ``question_id``."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    when: Predicate
    additional_key: str

    @model_validator(mode="before")
    @classmethod
    def _default_key(cls, data: Any) -> Any:
        # additional_key is optional in YAML; derive it from the question id
        if isinstance(data, dict) and not data.get("additional_key") and "question_id" in data:
            data = {**data, "additional_key": additional_key(data["question_id"])}
        return data
