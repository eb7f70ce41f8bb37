"""FastAPI dependency injection — provides the pipeline and schema store.

Both are built once in the app lifespan and stashed on ``app.state``.
"""

from fastapi import Request

from questionnaire_forms.pipeline import FormPipeline
from questionnaire_forms.schema_store import SchemaStore


def get_pipeline(request: Request) -> FormPipeline:
    """Return the pipeline singleton from ``app.state``."""
    return request.app.state.pipeline


def get_store(request: Request) -> SchemaStore:
    """Return the SchemaStore singleton from ``app.state``."""
    return request.app.state.store
