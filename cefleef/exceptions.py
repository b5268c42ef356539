"""Standardized exceptions and error handling for cefleef."""

import logging
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

# =============================================================================
# Error Response Model
# =============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = None
    message: str
    code: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: str  # Error type/category
    message: str  # Human-readable message
    code: str  # Machine-readable error code
    status_code: int  # HTTP status code
    request_id: str  # Unique request identifier
    details: list[ErrorDetail] | None = None  # Additional error details
    path: str | None = None  # Request path


# =============================================================================
# Parse Exceptions
# =============================================================================


class ParseError(Exception):
    """Base exception for CEF/LEEF parse failures.

    A parse either produces a complete record or raises one of the
    subclasses below; partially populated records are never returned.
    """

    def __init__(
        self,
        message: str,
        code: str = "PARSE_ERROR",
        status_code: int = 422,
        details: list[ErrorDetail] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class MissingMarkerError(ParseError):
    """Neither a ``CEF:`` nor a ``LEEF:`` marker was found in the line."""

    def __init__(self, markers: tuple[str, ...] = ("CEF:", "LEEF:")):
        self.markers = markers
        super().__init__(
            message=f"No {' or '.join(repr(m) for m in markers)} marker found",
            code="MISSING_MARKER",
        )


class IncompleteHeaderError(ParseError):
    """Fewer positional header fields than the format requires."""

    def __init__(self, fmt: str, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(
            message=f"{fmt} header requires {expected} fields, found {found}",
            code="INCOMPLETE_HEADER",
            details=[
                ErrorDetail(
                    field="header",
                    message=f"expected {expected} '|'-terminated fields",
                    code="too_few_fields",
                )
            ],
        )


class MalformedExtensionError(ParseError):
    """Extension section holds a token that is not a ``key=value`` pair."""

    def __init__(self, reason: str, position: int):
        self.reason = reason
        self.position = position
        super().__init__(
            message=f"Malformed extension at offset {position}: {reason}",
            code="MALFORMED_EXTENSION",
            details=[
                ErrorDetail(field="extension", message=reason, code="malformed_pair")
            ],
        )


# =============================================================================
# Exception Handlers
# =============================================================================


def create_error_response(
    request: Request,
    error: str,
    message: str,
    code: str,
    status_code: int,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    request_id = getattr(request.state, "request_id", str(uuid4()))

    response = ErrorResponse(
        error=error,
        message=message,
        code=code,
        status_code=status_code,
        request_id=request_id,
        details=details,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(exclude_none=True),
    )


async def parse_exception_handler(request: Request, exc: ParseError) -> JSONResponse:
    """Handle parse failures."""
    return create_error_response(
        request=request,
        error=exc.__class__.__name__,
        message=exc.message,
        code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    details = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        details.append(
            ErrorDetail(
                field=field,
                message=error["msg"],
                code=error["type"],
            )
        )

    return create_error_response(
        request=request,
        error="ValidationError",
        message="Request validation failed",
        code="VALIDATION_ERROR",
        status_code=422,
        details=details,
    )


# Routing errors this API can produce: unknown paths and wrong methods
HTTP_ERRORS = {
    404: ("NotFound", "NOT_FOUND"),
    405: ("MethodNotAllowed", "METHOD_NOT_ALLOWED"),
}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle routing errors raised by Starlette."""
    error, code = HTTP_ERRORS.get(exc.status_code, ("HTTPError", f"HTTP_{exc.status_code}"))
    return create_error_response(
        request=request,
        error=error,
        message=str(exc.detail),
        code=code,
        status_code=exc.status_code,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.exception("Unhandled exception on %s", request.url.path)

    return create_error_response(
        request=request,
        error="InternalServerError",
        message="An unexpected error occurred",
        code="INTERNAL_ERROR",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# =============================================================================
# Middleware
# =============================================================================


async def request_id_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Add request ID to each request for tracing."""
    request_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# Setup Function
# =============================================================================


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ParseError, parse_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.middleware("http")(request_id_middleware)
