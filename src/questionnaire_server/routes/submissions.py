"""Submission endpoint — validate, render, and deliver a questionnaire.

Validation failures return 422 with the error map.  Delivery failures are
*not* HTTP errors: the response is 200 with ``status="failed"`` and the
classified reason, so the client can offer to resend.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from questionnaire_forms.models.form import FormState, SubmissionOutcome
from questionnaire_forms.pipeline import FormPipeline

from questionnaire_server.dependencies import get_pipeline

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.post("/{questionnaire_type}/{lang}", response_model=SubmissionOutcome)
async def submit_questionnaire(
    questionnaire_type: str,
    lang: str,
    body: FormState,
    pipeline: FormPipeline = Depends(get_pipeline),
):
    """Submit a completed questionnaire."""
    outcome = await pipeline.submit(questionnaire_type, lang, body)
    if outcome.status == "invalid":
        return JSONResponse(status_code=422, content=outcome.model_dump())
    return outcome
