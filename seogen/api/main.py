"""FastAPI application entry point.

SEO content generation service:
- POST/OPTIONS /generate-seo-content
- GET /health

Run with ``uvicorn seogen.api.main:app``.
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from seogen.api import config
from seogen.api.core.errors import PipelineError
from seogen.api.observability.logger import configure_logging
from seogen.api.routers import generate, health

configure_logging(config.LOG_LEVEL, config.LOG_FORMAT)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

app = FastAPI(
    title="SEO Content Generator API",
    description="Prompt composition, AI gateway calls and output validation for SEO content",
    version=config.SERVICE_VERSION,
)


def cors_headers(origin: str | None) -> dict[str, str]:
    """CORS headers for a request from ``origin``.

    With a wildcard allow-list every origin gets ``*``. Otherwise only a listed
    origin is echoed back; unlisted origins get no Allow-Origin header.
    """
    headers = dict(CORS_HEADERS)
    if "*" in config.CORS_ORIGINS:
        headers["Access-Control-Allow-Origin"] = "*"
        return headers
    headers["Vary"] = "Origin"
    if origin and origin in config.CORS_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    return headers


# CORS headers on every response, including errors and the 204 preflight
@app.middleware("http")
async def add_cors_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    response = await call_next(request)
    for key, value in cors_headers(request.headers.get("origin")).items():
        response.headers.setdefault(key, value)
    return response


app.include_router(health.router)
app.include_router(generate.router)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """Render pipeline errors as ``{error}`` (+ ``details`` for 400)."""
    logger.warning(
        f"Request rejected: state={exc.error_state.value}, status={exc.status_code}, "
        f"error={exc.message}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: 500 with the exception message."""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Internal server error"},
        headers=cors_headers(request.headers.get("origin")),
    )
