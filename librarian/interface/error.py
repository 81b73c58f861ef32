"""Interface layer error mapping.

Maps domain errors to HTTP status codes. Every error response uses the
``{"ok": false, "error": ...}`` envelope.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from librarian.domain.error import (
    ClientUnavailableError,
    DomainError,
    InvalidCredentialsError,
    InviteConflictError,
    InviteExpiredError,
    InviteNotFoundError,
    RemotePlatformError,
    StoreError,
    TokenIdError,
    WrongInviteKindError,
)

# Most specific first; the first matching class wins
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (TokenIdError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_400_BAD_REQUEST),
    (WrongInviteKindError, status.HTTP_400_BAD_REQUEST),
    (InviteNotFoundError, status.HTTP_404_NOT_FOUND),
    (InviteExpiredError, status.HTTP_403_FORBIDDEN),
    (InviteConflictError, status.HTTP_409_CONFLICT),
    (ClientUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RemotePlatformError, status.HTTP_502_BAD_GATEWAY),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """Build an error envelope."""
    return JSONResponse(
        status_code=status_code, content={"ok": False, "error": message, **extra}
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error."""
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
    extra = {}
    if isinstance(exc, InvalidCredentialsError):
        extra["violations"] = exc.violations
    return error_response(status_code, str(exc), **extra)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render an HTTPException in the error envelope."""
    return error_response(exc.status_code, str(exc.detail))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a request body validation failure."""
    lines = [
        f"- {'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request:\n" + "\n".join(lines)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
