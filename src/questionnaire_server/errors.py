"""HTTP mapping for SDK exceptions.

Unknown questionnaire types, unsupported languages, and missing drafts are
404s with a detail naming what was missing.  Any other ``ValueError`` from
the SDK is a malformed request (400).  Everything else is logged with its
traceback and answered with a bare 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from questionnaire_forms.errors import (
    DraftNotFound,
    FormLookupError,
    LanguageNotSupported,
    QuestionnaireNotFound,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_DETAIL: dict[type[FormLookupError], str] = {
    QuestionnaireNotFound: "Questionnaire not found",
    LanguageNotSupported: "Language not supported",
    DraftNotFound: "Draft not found",
}


async def form_lookup_handler(request: Request, exc: FormLookupError) -> JSONResponse:
    detail = _NOT_FOUND_DETAIL.get(type(exc), "Resource not found")
    logger.info("%s: %s", request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": detail})


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    # raw message stays in the log; it may echo user input
    logger.warning("Bad request at %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": "Invalid request"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception at %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def install_error_handlers(app: FastAPI) -> None:
    """Register the handlers above on ``app``."""
    app.add_exception_handler(FormLookupError, form_lookup_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
