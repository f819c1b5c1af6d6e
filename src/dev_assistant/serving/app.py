"""FastAPI application exposing the assistant as a REST API."""

from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI, HTTPException, Query, Request

from dev_assistant.assistant.service import ChatResponse
from dev_assistant.bootstrap import Components, build_components, configure_logging, run_startup_ingestion
from dev_assistant.config import Settings, settings as default_settings
from dev_assistant.ingestion.models import IngestionReport

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings = default_settings,
    components_factory: Callable[[Settings], Components] = build_components,
) -> FastAPI:
    """Build the app; collaborators are constructed and documents ingested at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings)
        components = components_factory(settings)
        app.state.components = components
        with app.state.ingest_lock:
            app.state.startup_report = run_startup_ingestion(components, settings)
        yield

    app = FastAPI(
        title="Dev Assistant API",
        version="0.1.0",
        description="Retrieval-augmented developer assistant over an ingested documents directory.",
        lifespan=lifespan,
    )
    # Held for the whole of any ingestion run, startup included.
    app.state.ingest_lock = threading.Lock()

    # ── Routes ────────────────────────────────────────────────────────────
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/copilot", response_model=ChatResponse)
    def ask(request: Request, q: str | None = Query(default=None)) -> ChatResponse:
        """Answer a free-text question; blank input gets a guidance message."""
        components: Components = request.app.state.components
        return components.facade.ask(q)

    @app.post("/ingest", response_model=IngestionReport)
    def ingest(request: Request) -> Any:
        """Re-run ingestion over the documents directory (blocks until done).

        Answers 409 while another ingestion is still running.
        """
        lock: threading.Lock = request.app.state.ingest_lock
        if not lock.acquire(blocking=False):
            raise HTTPException(status_code=409, detail="Ingestion already running")
        try:
            components: Components = request.app.state.components
            return components.pipeline.run(settings.documents_dir)
        finally:
            lock.release()

    return app


app = create_app()
