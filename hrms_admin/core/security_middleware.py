"""Security headers for the console's JSON API."""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from hrms_admin.core import config

# Responses are JSON only, so nothing needs to load from them
API_CSP = "default-src 'none'; frame-ancestors 'none'"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses; HR records must not be cached."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        debug = bool(config.settings and config.settings.DEBUG)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # The interactive docs need scripts and styles in debug mode
        if not debug:
            response.headers["Content-Security-Policy"] = API_CSP

        if request.url.path.startswith("/api/v1/"):
            response.headers["Cache-Control"] = "no-store"

        if not debug and request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        if "server" in response.headers:
            del response.headers["server"]

        return response
