"""Interface layer error handling.

Domain errors carry a stable ``kind``; this module maps each kind to an
HTTP status and registers one handler for all of them.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from board.domain.error import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error (500 for unmapped kinds)."""
    for error_type in type(error).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as ``{"detail", "kind"}``."""
    assert isinstance(exc, DomainError)
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, kind=exc.kind, error=str(exc)
        )
        detail = "Internal server error"
    else:
        logfire.warn(
            "Request rejected", path=request.url.path, kind=exc.kind, error=str(exc)
        )
        detail = str(exc)
    return JSONResponse(
        status_code=status_code, content={"detail": detail, "kind": exc.kind}
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on ``app``."""
    app.add_exception_handler(DomainError, domain_error_handler)
