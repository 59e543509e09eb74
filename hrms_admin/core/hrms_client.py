"""Async client for the HRMS REST backend."""
from typing import Any, Dict, List, Optional

import httpx

from hrms_admin.core.config import get_settings
from hrms_admin.core.exceptions import AuthenticationError, BackendError, NotFoundError
from hrms_admin.core.logging_config import get_logger

logger = get_logger(__name__)

# Keys a list page may carry its records under
PAGE_RECORD_KEYS = ("results", "data", "stationery_usage")


def extract_records(payload: Any) -> List[Dict[str, Any]]:
    """Pull the record list out of a list response, whatever envelope it uses."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in PAGE_RECORD_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


class HRMSClient:
    """
    Thin wrapper around ``httpx.AsyncClient`` that speaks the HRMS backend's conventions.

    - Authentication uses ``Authorization: Token <value>``
    - ``X-CSRFToken`` is sent only when a CSRF token is known
    - Failures surface as BackendError / NotFoundError / AuthenticationError
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        csrf_token: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.token = token
        self.csrf_token = csrf_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._auth_headers(),
            timeout=timeout,
            transport=transport,
        )

    def _auth_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        if self.csrf_token:
            headers["X-CSRFToken"] = self.csrf_token
        return headers

    async def __aenter__(self) -> "HRMSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        logger.debug(f"{method} {url} params={kwargs.get('params')}")
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            body = _safe_body(e.response)
            logger.warning(f"HRMS backend returned {status_code} for {method} {url}")
            if status_code == 404:
                raise NotFoundError(
                    f"Resource not found: {url}",
                    error_code="NOT_FOUND",
                    details={"backend": body}
                )
            if status_code in (401, 403):
                raise AuthenticationError(
                    "The HRMS backend rejected the credentials",
                    error_code="BACKEND_AUTH_FAILED",
                    details={"backend": body}
                )
            raise BackendError(
                f"HRMS backend error {status_code} for {method} {url}",
                details={"backend": body},
                status_code=status_code
            )
        except httpx.RequestError as e:
            logger.error(f"HRMS backend unreachable for {method} {url}: {e}")
            raise BackendError(
                f"Could not reach the HRMS backend: {type(e).__name__}",
                error_code="BACKEND_UNREACHABLE"
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def ping(self) -> bool:
        """True when the backend answers at all, whatever the status code."""
        try:
            await self._client.get("")
        except httpx.RequestError as e:
            logger.warning(f"HRMS backend health check failed: {e}")
            return False
        return True

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def fetch_all(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Fetch a list endpoint, following ``next`` links until the collection is complete."""
        records: List[Dict[str, Any]] = []
        next_url: Optional[str] = path
        seen = set()
        page = 1

        while next_url and next_url not in seen:
            seen.add(next_url)
            payload = await self._request("GET", next_url, params=params if next_url == path else None)
            records.extend(extract_records(payload))
            next_url = payload.get("next") if isinstance(payload, dict) else None
            page += 1

        logger.debug(f"Fetched {len(records)} records from {path} in {page - 1} page(s)")
        return records

    async def retrieve(self, path: str, record_id: Any) -> Dict[str, Any]:
        return await self._request("GET", f"{path}{record_id}/")

    async def create(self, path: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", path, json=data)

    async def update(self, path: str, record_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"{path}{record_id}/", json=data)

    async def delete(self, path: str, record_id: Any) -> None:
        await self._request("DELETE", f"{path}{record_id}/")

    async def action(self, path: str, record_id: Any, action: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """POST to a detail action endpoint such as ``stationery_usage/{id}/issue_item/``."""
        return await self._request("POST", f"{path}{record_id}/{action}/", json=data or {})

    async def upload(self, path: str, data: Dict[str, Any], files: Dict[str, Any]) -> Dict[str, Any]:
        """Create a record from multipart form data; file contents are forwarded untouched."""
        return await self._request("POST", path, data=data, files=files)


def _safe_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text[:500]


def create_client(token: Optional[str] = None, csrf_token: Optional[str] = None) -> HRMSClient:
    """Build a client from settings; the service token is used when no token is given."""
    settings = get_settings()
    return HRMSClient(
        settings.HRMS_API_BASE_URL,
        token=token or settings.HRMS_SERVICE_TOKEN,
        csrf_token=csrf_token,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )
