"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from discuss.domain.error import (
    DomainError,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)

STATUS_CODES: dict[type[DomainError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_DETAIL = InternalError().message


def status_code_for(error: DomainError) -> int:
    """Get the HTTP status for a domain error, 500 for unknown kinds."""
    for error_type, code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError as {"detail": message}."""
    code = status_code_for(exc)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(
            "Request failed", path=request.url.path, error=exc.message, status=code
        )
        detail = exc.message if isinstance(exc, InternalError) else GENERIC_DETAIL
    else:
        logfire.warn(
            "Request rejected", path=request.url.path, error=exc.message, status=code
        )
        detail = exc.message
    return JSONResponse(status_code=code, content={"detail": detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other failure, e.g. while serializing a response, as a 500."""
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        _exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_DETAIL},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
