"""FastAPI application factory."""
from __future__ import annotations

import logging
import sys

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .auth import AuthError
from .config import get_config
from .db import dispose_db, init_db
from .routers import ai, projects, tts
from .schemas import ErrorResponse
from .services.errors import MalformedOutputFailure, PipelineError, UpstreamFailure, ValidationFailure
from .services.gemini_client import build_generation_client

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_config().is_dev else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Foresight Research Backend")
app.include_router(ai.router)
app.include_router(projects.router)
app.include_router(tts.router)


def _pipeline_status(exc: PipelineError) -> int:
    if isinstance(exc, ValidationFailure):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (UpstreamFailure, MalformedOutputFailure)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    status_code = _pipeline_status(exc)
    LOGGER.warning("%s %s failed with %s: %s", request.method, request.url.path, type(exc).__name__, exc.details or exc)
    details = None if isinstance(exc, ValidationFailure) else exc.details
    envelope = ErrorResponse(error=exc.message, details=details)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or wrongly typed bodies get the same 400 envelope as missing fields."""
    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in errors[:3]
    )
    LOGGER.warning("%s %s rejected: %s", request.method, request.url.path, details)
    envelope = ErrorResponse(error="Invalid request body", details=details or None)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=envelope.model_dump(exclude_none=True))


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=ErrorResponse(error="Unauthorized").model_dump(exclude_none=True),
    )


@app.on_event("startup")
async def startup() -> None:
    """Build shared clients and initialize the database."""
    config = get_config()
    LOGGER.info("Starting Foresight backend (env=%s, model=%s)", config.APP_ENV, config.GENERATION_MODEL)
    app.state.generation_client = build_generation_client(config)
    app.state.http_client = httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0))
    await init_db()
    LOGGER.info("Database initialized successfully")


@app.on_event("shutdown")
async def shutdown() -> None:
    await app.state.http_client.aclose()
    await dispose_db()


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint with basic system info."""
    config = get_config()
    return {
        "status": "ok",
        "env": config.APP_ENV,
        "model": config.GENERATION_MODEL,
    }
