"""Translate errors into HTTP responses for every router.

Protean's handlers cover the domain taxonomy:

    ValidationError        → 400
    ObjectNotFoundError    → 404
    InvalidStateError      → 409
    InvalidOperationError  → 422

On top of those this module maps a lost version race to 409, a failed
downstream call to 502 and a failing store to 500. Request bodies FastAPI
rejects are answered with 400 and the same ``{"error": {field: [msg]}}``
shape as a domain ``ValidationError``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import DatabaseError, ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from shared.errors import RemoteServiceError

logger = structlog.get_logger(__name__)


async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("request.version_conflict", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=409, content={"error": str(exc)})


async def remote_service_handler(request: Request, exc: RemoteServiceError) -> JSONResponse:
    logger.error("request.remote_failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=502, content={"error": str(exc)})


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("request.store_failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Storage operation failed"})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "_entity"
        messages.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": messages})


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)
    app.add_exception_handler(ExpectedVersionError, version_conflict_handler)
    app.add_exception_handler(RemoteServiceError, remote_service_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
