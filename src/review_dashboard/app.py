"""
FastAPI application exposing the business dashboard and sidebar.

Run (with a .env or environment configured):
  uvicorn review_dashboard.app:create_app --factory --reload
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI

from .api.middleware import AccessGuardMiddleware
from .api.router import router
from .config import Settings, configure_logging, get_settings
from .db.base import BaseDocumentStore
from .db.memory import InMemoryDocumentStore
from .db.mongo import MongoDocumentStore


logger = logging.getLogger(__name__)


def create_document_store(settings: Settings) -> BaseDocumentStore:
    if settings.MONGO_URI:
        return MongoDocumentStore.from_client_uri(settings.MONGO_URI, settings.MONGO_DB)
    logger.warning("No Mongo URI configured, using the in-memory document store")
    return InMemoryDocumentStore()


def create_app(
    store: Optional[BaseDocumentStore] = None,
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    if store is None:
        store = create_document_store(settings)

    app = FastAPI(title="Review dashboard")
    app.state.settings = settings
    app.state.store = store
    app.state.clock = clock
    app.add_middleware(
        AccessGuardMiddleware,
        store=store,
        user_id_header=settings.USER_HEADER,
        clock=clock,
    )
    app.include_router(router)
    return app
