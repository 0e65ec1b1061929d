"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from playbook_verifier.api.routes import canonicalize, health
from playbook_verifier.errors import (
    ParseError,
    PlaybookError,
    PlaybookVerifierError,
    SerializationError,
    VerificationError,
)
from playbook_verifier.logging import configure_logging, new_correlation_id
from playbook_verifier.settings import load_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

__all__ = ["create_app"]

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[PlaybookVerifierError], int] = {
    ParseError: 400,
    PlaybookError: 422,
    VerificationError: 403,
    SerializationError: 500,
}


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Inject correlation_id and request duration headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cid = request.headers.get("x-correlation-id") or new_correlation_id()
        request.state.request_id = cid

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        response.headers["x-correlation-id"] = cid
        response.headers["x-request-duration-ms"] = f"{duration * 1000:.1f}"
        return response


def _resolve_request_id(request: Request) -> str:
    state_request_id = getattr(request.state, "request_id", "")
    if state_request_id:
        return state_request_id
    header_request_id = request.headers.get("x-correlation-id", "")
    if header_request_id:
        request.state.request_id = header_request_id
        return header_request_id
    generated = new_correlation_id()
    request.state.request_id = generated
    return generated


def _error_payload(error_code: str, message: str, request_id: str, *, details: Any = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error_code": error_code,
        "message": message,
        "request_id": request_id,
    }
    if details is not None:
        payload["details"] = details
    return payload


async def _verifier_exception_handler(request: Request, exc: PlaybookVerifierError) -> JSONResponse:
    request_id = _resolve_request_id(request)
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    if status_code >= 500:
        logger.error("Canonicalisation failed unexpectedly: %s", exc)
        return JSONResponse(
            status_code=status_code,
            content=_error_payload("INTERNAL_ERROR", "Internal server error", request_id),
        )
    logger.info("Rejected playbook: %s", exc)
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(exc.error_code, exc.message, request_id, details=exc.context or None),
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    request_id = _resolve_request_id(request)
    status_code = exc.status_code
    error_code = "INVALID_REQUEST" if 400 <= status_code < 500 else "INTERNAL_ERROR"
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(error_code, message, request_id),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _resolve_request_id(request)
    logger.exception("Unhandled application exception", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=_error_payload("INTERNAL_ERROR", "Internal server error", request_id),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = load_settings()
    configure_logging(json_output=True, level=settings.log_level)
    app.state.settings = settings
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Playbook Verifier",
        version="0.1.0",
        description="Canonical, signable form of automation playbooks.",
        lifespan=lifespan,
    )
    app.add_exception_handler(PlaybookVerifierError, _verifier_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)
    app.add_middleware(CorrelationMiddleware)
    app.include_router(health.router, tags=["health"])
    app.include_router(canonicalize.router, tags=["canonicalize"])
    return app


app = create_app()
