"""Response envelope and the mapping from typed errors to HTTP responses.

Every body the API sends, success or failure, has the same shape:
`{success, message, data, error, timestamp}`. `error` holds the error kind so
clients can branch on it without parsing `message`.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.api.schemas import ApiResponse
from storefront.shared.errors import ErrorKind, PlacementFailed, first_message

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.OUT_OF_STOCK: 409,
    ErrorKind.INVALID_TRANSITION: 409,
    ErrorKind.INVALID_QUANTITY: 400,
    ErrorKind.DUPLICATE_EMAIL: 400,
    ErrorKind.PLACEMENT_FAILED: 503,
    ErrorKind.CONFLICT: 409,
}


class AccessDenied(Exception):
    """The caller is missing, unknown, or lacks the role a route requires."""

    def __init__(self, message: str, status_code: int = 403, kind: str = "Forbidden") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind


def envelope(data: Any = None, message: str = "OK", success: bool = True, error: str | None = None) -> ApiResponse:
    return ApiResponse(success=success, message=message, data=data, error=error, timestamp=datetime.now(UTC))


def _failure(status_code: int, kind: str, message: str) -> JSONResponse:
    body = envelope(success=False, message=message, error=kind)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    """Translate storefront and Protean exceptions into enveloped error responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        kind = getattr(exc, "kind", None)
        if kind is None:
            return _failure(400, "ValidationError", first_message(exc))
        return _failure(_STATUS_BY_KIND[kind], kind.value, first_message(exc))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return _failure(404, ErrorKind.NOT_FOUND.value, str(exc))

    @app.exception_handler(PlacementFailed)
    async def placement_failed_handler(request: Request, exc: PlacementFailed) -> JSONResponse:
        return _failure(_STATUS_BY_KIND[exc.kind], exc.kind.value, str(exc))

    @app.exception_handler(AccessDenied)
    async def access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
        logger.info("Access denied", path=request.url.path, reason=exc.kind)
        return _failure(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return _failure(422, "InvalidRequest", message)
