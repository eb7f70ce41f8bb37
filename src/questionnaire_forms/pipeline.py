"""FormPipeline — orchestrates draft handling and submission.

Submission flow::

    validate ──► (errors) ──► invalid
       │
       ▼
    render ──► send ──► (ok) ──► clear draft ──► sent
                  │
                  └──► (failure) ──► failed   (draft kept for a retry)

Usage::

    store = SchemaStore()
    store.load()
    pipeline = FormPipeline(store, DraftStore(), TelegramSubmitter())

    pipeline.save_draft("woman", "ru", state)
    outcome = await pipeline.submit("woman", "ru", state)
    if outcome.status == "invalid":
        show(outcome.errors)
"""

from __future__ import annotations

import logging
from typing import Optional

from questionnaire_forms.drafts import DraftStore
from questionnaire_forms.errors import LanguageNotSupported, QuestionnaireNotFound
from questionnaire_forms.models.form import (
    Draft,
    DraftLoadResult,
    FormErrors,
    FormState,
    SubmissionOutcome,
)
from questionnaire_forms.renderer import ReportRenderer
from questionnaire_forms.schema_store import SchemaStore
from questionnaire_forms.submitter import TelegramSubmitter
from questionnaire_forms.validator import validate_form

logger = logging.getLogger(__name__)


class FormPipeline:
    """Ties together schema, drafts, validation, rendering, and delivery.

    Args:
        store: a loaded :class:`SchemaStore`
        drafts: draft persistence
        submitter: report delivery
        renderer: optional custom renderer; defaults to one using the
            store's message table
    """

    def __init__(
        self,
        store: SchemaStore,
        drafts: DraftStore,
        submitter: TelegramSubmitter,
        renderer: ReportRenderer | None = None,
    ) -> None:
        self._store = store
        self._drafts = drafts
        self._submitter = submitter
        self._renderer = renderer or ReportRenderer(messages=store.messages)

    # ==================================================================
    # Drafts
    # ==================================================================

    def save_draft(self, questionnaire_type: str, lang: str, state: FormState) -> bool:
        self._check(questionnaire_type, lang)
        return self._drafts.save(
            questionnaire_type, lang,
            state.form_data, state.additional_data, state.contact_data,
        )

    def restore_draft(self, questionnaire_type: str, lang: str) -> Optional[Draft]:
        self._check(questionnaire_type, lang)
        return self._drafts.load(questionnaire_type, lang)

    def restore_draft_result(self, questionnaire_type: str, lang: str) -> DraftLoadResult:
        self._check(questionnaire_type, lang)
        return self._drafts.load_result(questionnaire_type, lang)

    def reset(self, questionnaire_type: str, lang: str) -> None:
        """Discard the draft (the "start over" button)."""
        self._check(questionnaire_type, lang)
        self._drafts.clear(questionnaire_type, lang)

    # ==================================================================
    # Validation / rendering
    # ==================================================================

    def validate(self, questionnaire_type: str, lang: str, state: FormState) -> FormErrors:
        self._check(questionnaire_type, lang)
        return validate_form(
            self._store.get_sections(questionnaire_type),
            state.form_data,
            state.contact_data,
            lang,
            additional_data=state.additional_data,
            rules=self._store.get_rules(questionnaire_type),
            messages=self._store.messages,
        )

    def render(self, questionnaire_type: str, lang: str, state: FormState) -> str:
        self._check(questionnaire_type, lang)
        return self._renderer.render(
            questionnaire_type,
            self._store.get_sections(questionnaire_type),
            state.form_data,
            state.additional_data,
            state.contact_data,
            lang,
        )

    # ==================================================================
    # Submission
    # ==================================================================

    async def submit(
        self, questionnaire_type: str, lang: str, state: FormState,
    ) -> SubmissionOutcome:
        """Validate, render, and deliver the questionnaire.

        The draft is cleared only after a successful delivery so that a
        failed send can be retried without re-entering answers.
        """
        errors = self.validate(questionnaire_type, lang, state)
        if errors:
            logger.info(
                "Submission of %s/%s rejected: %d invalid fields",
                questionnaire_type, lang, len(errors),
            )
            return SubmissionOutcome(status="invalid", errors=errors)

        report = self.render(questionnaire_type, lang, state)
        result = await self._submitter.send(report)

        if not result.success:
            logger.warning(
                "Delivery of %s/%s failed (%s): %s",
                questionnaire_type, lang, result.error_kind, result.error,
            )
            return SubmissionOutcome(status="failed", report=report, delivery=result)

        self._drafts.clear(questionnaire_type, lang)
        return SubmissionOutcome(status="sent", report=report, delivery=result)

    # ------------------------------------------------------------------

    def _check(self, questionnaire_type: str, lang: str) -> None:
        # lang is part of the draft storage key; unknown tags would mint new keys
        if questionnaire_type not in self._store.sections:
            raise QuestionnaireNotFound(questionnaire_type)
        if not self._store.has_language(lang):
            raise LanguageNotSupported(lang)
