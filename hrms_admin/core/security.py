"""Request-scoped dependencies: HRMS credentials and UI preferences."""
from typing import AsyncIterator, Optional

from fastapi import Request

from hrms_admin.core.config import get_settings
from hrms_admin.core.exceptions import AuthenticationError
from hrms_admin.core.hrms_client import HRMSClient, create_client
from hrms_admin.core.preferences import Preferences, build_store

CSRF_COOKIE_NAME = "csrftoken"

_preferences: Optional[Preferences] = None


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Read the token from ``Token <value>`` or ``Bearer <value>`` headers."""
    if not authorization:
        return None
    parts = authorization.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() not in ("token", "bearer"):
        return None
    return parts[1].strip() or None


async def get_hrms_client(request: Request) -> AsyncIterator[HRMSClient]:
    """Yield an HRMS client that forwards the caller's token and CSRF cookie."""
    token = extract_token(request.headers.get("Authorization"))
    if not token and not get_settings().HRMS_SERVICE_TOKEN:
        raise AuthenticationError(
            "Authentication credentials were not provided",
            error_code="MISSING_TOKEN"
        )

    client = create_client(token=token, csrf_token=request.cookies.get(CSRF_COOKIE_NAME))
    try:
        yield client
    finally:
        await client.aclose()


def get_preferences() -> Preferences:
    """Process-wide preferences, backed by PREFERENCES_FILE when configured."""
    global _preferences
    if _preferences is None:
        _preferences = Preferences(build_store(get_settings().PREFERENCES_FILE))
    return _preferences
