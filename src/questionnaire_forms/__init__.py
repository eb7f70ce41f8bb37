"""questionnaire_forms — health questionnaire form-processing SDK.

Public API:
    FormPipeline      — validate → render → send orchestration with drafts
    SchemaStore       — loads questionnaire YAML into typed models
    DraftStore        — best-effort draft persistence with a 24h freshness window
    FileStorage       — one-file-per-key draft storage backend
    InMemoryStorage   — dict-backed draft storage backend
    ReportRenderer    — Jinja2 report renderer
    TelegramSubmitter — delivers reports via the Telegram Bot API
    TelegramSettings  — bot credentials and timeout

Functions:
    validate_form     — required/trigger/contact checks → error map
    render_report     — render a report with the packaged template
    send_to_telegram  — one-off delivery helper
"""

from questionnaire_forms.config import TelegramSettings, load_telegram_settings
from questionnaire_forms.drafts import DraftStore, storage_key
from questionnaire_forms.models.form import (
    ContactData,
    Draft,
    DraftLoadResult,
    FormState,
    SubmissionOutcome,
    SubmitResult,
)
from questionnaire_forms.pipeline import FormPipeline
from questionnaire_forms.renderer import ReportRenderer, render_report
from questionnaire_forms.schema_store import SchemaStore
from questionnaire_forms.storage import DraftStorage, FileStorage, InMemoryStorage
from questionnaire_forms.submitter import TelegramSubmitter, send_to_telegram
from questionnaire_forms.validator import validate_form

__all__ = [
    # Orchestration & schema
    "FormPipeline",
    "SchemaStore",
    # Drafts
    "DraftStore",
    "DraftStorage",
    "FileStorage",
    "InMemoryStorage",
    "storage_key",
    # Validation / rendering / delivery
    "validate_form",
    "ReportRenderer",
    "render_report",
    "TelegramSettings",
    "TelegramSubmitter",
    "load_telegram_settings",
    "send_to_telegram",
    # Models
    "ContactData",
    "Draft",
    "DraftLoadResult",
    "FormState",
    "SubmissionOutcome",
    "SubmitResult",
]
