"""FastAPI application entry point."""

import logging
import uuid as _uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from structlog.contextvars import bound_contextvars

from simples_api.api.router import api_router
from simples_api.config import get_settings
from simples_api.dependencies import create_engine, create_session_factory
from simples_api.errors import (
    ApiError,
    EndpointNotFoundError,
    InvalidIdentifierError,
    UnexpectedError,
)
from simples_api.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager: owns the database connection pool."""
    settings = get_settings()
    logger.info("Starting system lookup service...")
    logger.info("Environment: %s", settings.environment)
    logger.info(
        "Database: %s:%s/%s (pool size %s)",
        settings.db_host,
        settings.db_port,
        settings.db_name,
        settings.db_pool_size,
    )

    try:
        engine = create_engine(settings)
    except Exception:
        logger.exception("Failed to initialise database engine")
        raise
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    yield

    # Shutdown: close pooled connections; checked-out ones close on checkin
    logger.info("Closing database connection pool...")
    await engine.dispose()
    logger.info("Shutdown complete.")


# ---------------------------------------------------------------------------
# Request ID middleware: pure ASGI (no BaseHTTPMiddleware overhead)
# ---------------------------------------------------------------------------


def _incoming_request_id(raw: bytes) -> str:
    """Client-supplied request ID, or "" when absent or not valid UTF-8."""
    try:
        return raw.decode()
    except UnicodeDecodeError:
        return ""


class RequestIDMiddleware:
    """Inject a unique request ID into every request/response cycle."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = _incoming_request_id(headers.get(b"x-request-id", b"")) or str(_uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = response_headers
            await send(message)

        with bound_contextvars(request_id=request_id):
            await self.app(scope, receive, send_with_request_id)


# ---------------------------------------------------------------------------
# Exception handlers: every error body is {error, message}; never leak internals
# ---------------------------------------------------------------------------


def _error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error_handler(_request: Request, exc: ApiError):
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(_request: Request, exc: StarletteHTTPException):
        # Unknown path and known path with an unsupported method both count
        # as a routing miss.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error_response(EndpointNotFoundError())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Request failed", "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(_request: Request, _exc: RequestValidationError):
        return _error_response(InvalidIdentifierError())

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(UnexpectedError())


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_application() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Pathfinder Simples API",
        description="Read-only lookup of map-scoped systems from the Pathfinder database.",
        version="1.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    _register_exception_handlers(app)

    app.include_router(api_router)

    return app


# Create the application instance
app = create_application()
