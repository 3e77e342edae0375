"""
Error taxonomy and the single exception-to-response table.

Services raise the exceptions below at the point of detection; the handlers
registered by `register_exception_handlers` translate them into
`{"message": ..., "permanent": ...}` bodies at the HTTP boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class BankError(Exception):
    """Base class for every business-rule failure raised by the services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CustomerValidationError(BankError):
    """The request breaks a business rule and cannot be applied as sent."""


class DuplicateEmailError(CustomerValidationError):
    pass


class DuplicatePersonalIdNumberError(CustomerValidationError):
    pass


class CustomerNotFoundError(BankError):
    pass


class OperationNotSupportedError(BankError):
    pass


class CustomerConflictError(BankError):
    """A unique constraint in the database rejected the write."""


@dataclass(frozen=True)
class ErrorMapping:
    status_code: int
    permanent: bool
    message: Optional[str] = None  # fixed message; None means use the exception's own


# Most specific classes first; the first isinstance match wins.
ERROR_MAPPINGS: list[tuple[type[Exception], ErrorMapping]] = [
    (CustomerValidationError, ErrorMapping(status.HTTP_400_BAD_REQUEST, False)),
    (RequestValidationError, ErrorMapping(status.HTTP_400_BAD_REQUEST, False)),
    (CustomerNotFoundError, ErrorMapping(status.HTTP_404_NOT_FOUND, False)),
    (OperationNotSupportedError, ErrorMapping(status.HTTP_501_NOT_IMPLEMENTED, False)),
    (CustomerConflictError, ErrorMapping(status.HTTP_409_CONFLICT, True)),
    (
        IntegrityError,
        ErrorMapping(
            status.HTTP_409_CONFLICT,
            True,
            "A constraint violation occurred. This could be due to duplicate unique fields.",
        ),
    ),
]

DEFAULT_MAPPING = ErrorMapping(
    status.HTTP_500_INTERNAL_SERVER_ERROR, False, "An unexpected error occurred"
)


def mapping_for(exc: Exception) -> ErrorMapping:
    for exc_type, mapping in ERROR_MAPPINGS:
        if isinstance(exc, exc_type):
            return mapping
    return DEFAULT_MAPPING


def error_body(message: str, permanent: bool) -> dict:
    return {"message": message, "permanent": permanent}


def _message_for(exc: Exception, mapping: ErrorMapping) -> str:
    if mapping.message is not None:
        return mapping.message
    if isinstance(exc, BankError):
        return exc.message
    if isinstance(exc, RequestValidationError):
        return _format_validation_errors(exc)
    return str(exc)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def handle_mapped_exception(request: Request, exc: Exception) -> JSONResponse:
    mapping = mapping_for(exc)
    if mapping.status_code >= 500:
        logger.exception("Caught exception handling request, type=%s", type(exc).__name__)
    else:
        logger.error(
            "Caught exception handling request, type=%s message=%s", type(exc).__name__, exc
        )
    return JSONResponse(
        status_code=mapping.status_code,
        content=error_body(_message_for(exc, mapping), mapping.permanent),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.error(
        "Caught exception handling request, type=%s status=%s",
        type(exc).__name__,
        exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), False),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type, _ in ERROR_MAPPINGS:
        app.add_exception_handler(exc_type, handle_mapped_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_mapped_exception)
