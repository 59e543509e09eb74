"""Exceptions raised by the console and how they are shown to users."""
from typing import Optional, Dict, Any


class HRMSAdminException(Exception):
    """
    Base exception for the console.

    ``error_code`` is a stable machine-readable code for the front end;
    ``details`` carries structured context such as the offending field.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class BackendError(HRMSAdminException):
    """The HRMS backend could not be reached or answered with an error status."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, error_code=error_code or "BACKEND_ERROR", details=details)
        self.status_code = status_code


class ValidationError(HRMSAdminException):
    """Input rejected before anything was sent to the backend."""


class AuthenticationError(HRMSAdminException):
    """No usable credentials, or the backend refused them."""


class NotFoundError(HRMSAdminException):
    pass


class ActionError(HRMSAdminException):
    """An approve/reject/issue/create/update/delete call failed; nothing changed locally."""


class ConfigurationError(HRMSAdminException):
    pass


# First match wins; checked against the lowercased message
_SENSITIVE_MESSAGES = (
    (("password", "credential"), "Authentication failed. Please check your credentials."),
    (("connection", "timeout", "timed out"), "The HRMS service is unreachable. Please try again later."),
    (("token", "auth", "csrf"), "Authentication error. Please login again."),
    (("secret", "key"), "An error occurred. Please try again or contact support."),
)


def sanitize_error_message(error: Exception, include_details: bool = False) -> str:
    """
    User-facing message for an exception.

    Application exceptions keep their own message. Anything else is replaced by
    a generic message outside debug mode, since it may quote tokens or URLs.

    Args:
        error: The exception to describe
        include_details: Include the exception type and text even when not in debug mode
    """
    from hrms_admin.core import config

    if isinstance(error, HRMSAdminException):
        return error.message

    debug = bool(config.settings and config.settings.DEBUG)
    text = str(error)

    if not debug:
        lowered = text.lower()
        for patterns, message in _SENSITIVE_MESSAGES:
            if any(pattern in lowered for pattern in patterns):
                return message

    if debug or include_details:
        return f"{type(error).__name__}: {text}"
    return "An error occurred. Please try again."
