"""Translate application exceptions into JSON error responses."""
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hrms_admin.core import config
from hrms_admin.core.exceptions import (
    HRMSAdminException,
    ActionError,
    AuthenticationError,
    BackendError,
    ConfigurationError,
    NotFoundError,
    ValidationError,
    sanitize_error_message
)
from hrms_admin.core.logging_config import get_logger

logger = get_logger(__name__)

# Checked in order; the first matching class wins
ERROR_STATUS: Dict[Type[HRMSAdminException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ActionError: status.HTTP_409_CONFLICT,
    BackendError: status.HTTP_502_BAD_GATEWAY,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_status(exc: HRMSAdminException) -> int:
    for exc_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _debug() -> bool:
    return bool(config.settings and config.settings.DEBUG)


def error_body(message: str, error_code: str, details=None) -> Dict[str, object]:
    return {
        "error": True,
        "message": message,
        "error_code": error_code,
        "details": details,
    }


async def application_error_handler(request: Request, exc: HRMSAdminException) -> JSONResponse:
    status_code = error_status(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} failed: {exc.message}",
        extra={"error_code": exc.error_code, "details": exc.details}
    )

    # Validation details name the offending field, so they are always shown
    show_details = _debug() or isinstance(exc, ValidationError)
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.message, exc.error_code, exc.details if show_details else None)
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")

    details = {"type": type(exc).__name__, "message": str(exc)} if _debug() else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(sanitize_error_message(exc), "INTERNAL_ERROR", details)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HRMSAdminException, application_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
