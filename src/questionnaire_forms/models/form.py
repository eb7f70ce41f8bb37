"""Form state models — answers, contact details, drafts, and submission results.

These are the values that flow between the UI, the draft store, the
validator, the renderer, and the submitter:

  - FormData: question id -> answer (string, or list of strings for checkbox)
  - FormAdditionalData: ``<question_id>_additional`` -> elaboration text
  - FormErrors: field key -> localized error message (empty means valid)
  - ContactData: how the clinic should reach the respondent
  - FormState: the three user-editable pieces bundled together
  - Draft: a FormState snapshot with its creation timestamp
  - DraftLoadResult: outcome of a restore attempt
  - SubmitResult: normalized outcome of a delivery attempt
  - SubmissionOutcome: outcome of the whole validate/render/send flow
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

FormData = dict[str, Union[str, list[str]]]
FormAdditionalData = dict[str, str]
FormErrors = dict[str, str]


class ContactData(BaseModel):
    """Messaging account the report's recipient should use to reply."""

    method: Literal["telegram", "instagram"] = "telegram"
    username: str = ""


class FormState(BaseModel):
    """Everything the respondent has entered so far."""

    form_data: FormData = Field(default_factory=dict)
    additional_data: FormAdditionalData = Field(default_factory=dict)
    contact_data: ContactData = Field(default_factory=ContactData)


class Draft(FormState):
    """A persisted FormState.

    ``timestamp`` is epoch milliseconds at save time.  Serialized with
    camelCase aliases so the stored JSON matches the browser client's
    ``{formData, additionalData, contactData, timestamp}`` layout.
    """

    timestamp: int

    def to_storage(self) -> dict:
        return {
            "formData": self.form_data,
            "additionalData": self.additional_data,
            "contactData": self.contact_data.model_dump(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_storage(cls, raw: dict) -> "Draft":
        return cls(
            form_data=raw.get("formData") or {},
            additional_data=raw.get("additionalData") or {},
            contact_data=ContactData(**(raw.get("contactData") or {})),
            timestamp=raw["timestamp"],
        )


class DraftLoadResult(BaseModel):
    """Outcome of :meth:`DraftStore.load_result`.

    ``status`` is "found" only when a fresh draft exists; ``draft`` is set
    in that case alone.
    """

    status: Literal["found", "missing", "expired", "corrupt"]
    draft: Optional[Draft] = None

    @property
    def found(self) -> bool:
        return self.status == "found"


SubmitErrorKind = Literal[
    "configuration_missing",
    "remote_rejected",
    "timeout",
    "network",
    "unknown",
]


class SubmitResult(BaseModel):
    """Normalized delivery result; ``error`` is a human-readable description."""

    success: bool
    error: Optional[str] = None
    error_kind: Optional[SubmitErrorKind] = None


class SubmissionOutcome(BaseModel):
    """Result of :meth:`FormPipeline.submit`.

    status:
      - invalid: validation failed, ``errors`` is non-empty, nothing was sent
      - sent: the report was delivered and the draft cleared
      - failed: delivery failed, ``delivery`` carries the reason
    """

    status: Literal["invalid", "sent", "failed"]
    errors: FormErrors = Field(default_factory=dict)
    report: Optional[str] = None
    delivery: Optional[SubmitResult] = None
