"""Draft endpoints — save, restore, reset, and validate in-progress forms.

Draft identity is the (questionnaire type, language) pair, matching the
``health_questionnaire_<type>_<lang>`` storage key.
"""

from fastapi import APIRouter, Depends

from questionnaire_forms.errors import DraftNotFound
from questionnaire_forms.models.form import Draft, FormState
from questionnaire_forms.pipeline import FormPipeline

from questionnaire_server.dependencies import get_pipeline

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.put("/{questionnaire_type}/{lang}")
def save_draft(
    questionnaire_type: str,
    lang: str,
    body: FormState,
    pipeline: FormPipeline = Depends(get_pipeline),
) -> dict:
    """Save the current form state, replacing any previous draft.

    Persistence is best-effort: ``saved`` is false when storage failed,
    but the request itself still succeeds.
    """
    saved = pipeline.save_draft(questionnaire_type, lang, body)
    return {"saved": saved}


@router.get("/{questionnaire_type}/{lang}")
def restore_draft(
    questionnaire_type: str,
    lang: str,
    pipeline: FormPipeline = Depends(get_pipeline),
) -> Draft:
    """Return the stored draft.

    Raises 404 when there is no draft or it has expired.
    """
    draft = pipeline.restore_draft(questionnaire_type, lang)
    if draft is None:
        raise DraftNotFound(questionnaire_type, lang)
    return draft


@router.delete("/{questionnaire_type}/{lang}", status_code=204)
def reset_draft(
    questionnaire_type: str,
    lang: str,
    pipeline: FormPipeline = Depends(get_pipeline),
) -> None:
    """Discard the stored draft; succeeds even if none exists."""
    pipeline.reset(questionnaire_type, lang)


@router.post("/{questionnaire_type}/{lang}/validate")
def validate_draft(
    questionnaire_type: str,
    lang: str,
    body: FormState,
    pipeline: FormPipeline = Depends(get_pipeline),
) -> dict:
    """Validate a form state without submitting it."""
    errors = pipeline.validate(questionnaire_type, lang, body)
    return {"valid": not errors, "errors": errors}
