"""FastAPI service for drafting, validating, and submitting questionnaires.

Run with ``questionnaire-server`` or ``uvicorn questionnaire_server.app:app``.
Questionnaire YAML is loaded once at startup; if it is malformed the
service refuses to start.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from questionnaire_forms.config import load_telegram_settings
from questionnaire_forms.drafts import DraftStore
from questionnaire_forms.pipeline import FormPipeline
from questionnaire_forms.schema_store import SchemaStore
from questionnaire_forms.storage import DraftStorage, FileStorage, InMemoryStorage
from questionnaire_forms.submitter import TelegramSubmitter

from questionnaire_server.config import ServerSettings, load_settings
from questionnaire_server.errors import install_error_handlers
from questionnaire_server.routes import register_routes

logger = logging.getLogger(__name__)


def _draft_storage(settings: ServerSettings) -> DraftStorage:
    if settings.draft_storage_dir:
        logger.info("Drafts stored under %s", settings.draft_storage_dir)
        return FileStorage(settings.draft_storage_dir)
    logger.warning("DRAFT_STORAGE_DIR not set; drafts are lost on restart")
    return InMemoryStorage()


def build_pipeline(store: SchemaStore, settings: ServerSettings) -> FormPipeline:
    """Wire drafts and Telegram delivery around a loaded schema store."""
    telegram = load_telegram_settings()
    if not telegram.is_configured:
        logger.warning("Telegram bot token or chat id missing; submissions will fail")
    return FormPipeline(
        store,
        DraftStore(_draft_storage(settings)),
        TelegramSubmitter(telegram),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: ServerSettings = app.state.settings
    store = SchemaStore(data_dir=settings.data_dir)
    store.load()
    logger.info("Loaded questionnaires: %s", ", ".join(store.sections))

    app.state.store = store
    app.state.pipeline = build_pipeline(store, settings)
    yield


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build the application; ``settings`` defaults to the environment."""
    settings = settings or load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Health Questionnaire API",
        description="Draft, validate, and submit health questionnaires",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "PUT", "POST", "DELETE"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    @app.get("/health")
    async def health() -> dict:
        store: SchemaStore | None = getattr(app.state, "store", None)
        if store is None or not store.sections:
            return {"status": "error", "detail": "schemas not loaded"}
        return {"status": "ok", "questionnaires": len(store.sections)}

    register_routes(app)
    return app


app = create_app()


def cli() -> None:
    """Entry point of the ``questionnaire-server`` script."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
