"""
FastAPI Application
===================
Service-mode entry point: every ``GET /`` renders a newly shuffled card.

Handlers are plain ``def`` functions, so FastAPI runs them in its worker
thread pool. The only state they share is the immutable CardGenerator.
"""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from namebingo import __version__
from namebingo.domain.errors import BingoError

if TYPE_CHECKING:
    from namebingo.services.card import CardGenerator

log = structlog.get_logger("namebingo.web")


def create_app(generator: CardGenerator) -> FastAPI:
    """Build the service app around *generator*."""
    app = FastAPI(
        title="namebingo",
        description="Randomized name bingo cards",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/", response_class=HTMLResponse)
    def card() -> Response:
        """A freshly shuffled card."""
        with structlog.contextvars.bound_contextvars(request_id=uuid.uuid4().hex[:8]):
            try:
                document = generator.render()
            except BingoError as exc:
                log.error("card.failed", code=exc.code, error=exc.message)
                return PlainTextResponse(f"{exc.code}: {exc.message}", status_code=500)
            log.debug("card.rendered", cells=generator.spec.cell_count)
            return HTMLResponse(document)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok", "version": __version__}

    return app
