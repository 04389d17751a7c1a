"""FastAPI application factory.

Errors
------
Every :class:`~contentaudit.scraper.errors.ContentAuditError` is answered as
``{"error": "<message>"}`` with the status the error class declares.  Request
bodies that fail validation (including non-JSON bodies) answer 400 in the same
shape, and anything unexpected answers 500.

Routers
-------
    /fetch-url-content  — fetch a URL and extract its primary content
    /extract            — extract primary content from posted markup
    /health             — liveness probe
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contentaudit.api.routers import content as content_router
from contentaudit.config import configure_logging
from contentaudit.scraper.errors import ContentAuditError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _pipeline_error_handler(request: Request, exc: ContentAuditError) -> JSONResponse:
    # Stage and URL are already logged by the pipeline.
    logger.debug("Answering %d for %s: %s", exc.http_status, request.url.path, exc.message)
    return _error_response(exc.http_status, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return _error_response(400, f"Invalid request body: {message}")


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s", request.url.path)
    return _error_response(500, str(exc) or "Unknown error")


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Content Audit API",
        description=(
            "Fetches a web page and returns the normalized plain text of its "
            "primary content, ready for downstream content analysis."
        ),
        version="0.1.0",
    )

    # Any origin may call the API; no credential gating at this layer.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ContentAuditError, _pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(content_router.router, tags=["content"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn contentaudit.api.app:app --reload
app = create_app()
