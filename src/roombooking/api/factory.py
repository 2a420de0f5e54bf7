"""FastAPI application factory - the composition root.

Owns the Storage handle and threads it into request handlers through the
get_storage dependency.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from roombooking.domain.errors import (
    BookingError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from roombooking.infra.db import Storage
from roombooking.observability.correlation import (
    CORRELATION_ID_HEADER,
    bind_correlation_id,
    unbind_correlation_id,
)
from roombooking.observability.logging import configure_logging, get_logger

from .routes import health, reservations, rooms

logger = get_logger(__name__)

_ERROR_STATUS: list[tuple[type[BookingError], int]] = [
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StorageError, 503),
]


def _status_for(exc: BookingError) -> int:
    for error_cls, status_code in _ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code
    return 500


def create_app(storage: Storage | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        storage: Storage handle. A lazily-connecting one configured from the
            environment is created if None.

    Returns:
        Configured FastAPI application.
    """
    configure_logging()
    if storage is None:
        storage = Storage()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.storage.close()

    app = FastAPI(
        title="Room Booking",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.storage = storage

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid, token = bind_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            unbind_correlation_id(token)

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error(
                "request failed",
                extra={"extra_fields": {"path": request.url.path, "error": exc.code}},
            )
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": exc.code},
        )

    app.include_router(health.router)
    app.include_router(rooms.router)
    app.include_router(reservations.router)

    return app
