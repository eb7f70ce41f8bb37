"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from questionnaire_server.routes.drafts import router as drafts_router
from questionnaire_server.routes.questionnaires import router as questionnaires_router
from questionnaire_server.routes.submissions import router as submissions_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(questionnaires_router, prefix=API_PREFIX)
    app.include_router(drafts_router, prefix=API_PREFIX)
    app.include_router(submissions_router, prefix=API_PREFIX)
