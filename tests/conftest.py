"""
Pytest configuration and fixtures for the HRMS Admin Console tests.

The HRMS backend is replaced by ``FakeBackend``, an ``httpx.MockTransport``
handler with canned responses keyed by method and path.
"""

import os

os.environ.setdefault("HRMS_API_BASE_URL", "http://hrms.test/api/")
os.environ.setdefault("DEBUG", "false")

import httpx
import pytest
from fastapi.testclient import TestClient

from hrms_admin.core.hrms_client import HRMSClient
from hrms_admin.core.preferences import InMemoryStore, Preferences
from hrms_admin.core.security import get_hrms_client, get_preferences

from main import app

BASE_URL = "http://hrms.test/api/"


class FakeBackend:
    """Canned HRMS responses; every request received is kept in ``requests``."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json=None, status_code=200):
        """Register a response for ``/api/<path>``; ``json`` may be a callable taking the request."""
        self.routes[(method, "/api/" + path)] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        full_path = request.url.raw_path.decode("ascii")
        route = self.routes.get((request.method, full_path)) or self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not found."})

        status_code, body = route
        if callable(body):
            body = body(request)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def client(self, token="test-token", csrf_token=None) -> HRMSClient:
        return HRMSClient(BASE_URL, token=token, csrf_token=csrf_token, transport=httpx.MockTransport(self.handler))

    def sent(self, method, path):
        """Requests received for ``/api/<path>`` with the given method."""
        return [
            r for r in self.requests
            if r.method == method and r.url.path == "/api/" + path
        ]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def preferences():
    return Preferences(InMemoryStore())


@pytest.fixture(scope="function")
def client(backend, preferences):
    """
    Test client whose HRMS calls go to the fake backend.
    """
    async def override_get_hrms_client():
        hrms = backend.client()
        try:
            yield hrms
        finally:
            await hrms.aclose()

    app.dependency_overrides[get_hrms_client] = override_get_hrms_client
    app.dependency_overrides[get_preferences] = lambda: preferences
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Token test-token"}


@pytest.fixture
def sample_items():
    """Three items covering every stock status."""
    return [
        {"id": 1, "name": "Pens", "current_stock": 0, "reorder_level": 5, "unit": "pcs", "unit_price": "2.50"},
        {"id": 2, "name": "Staplers", "current_stock": 5, "reorder_level": 5, "unit": "pcs", "unit_price": None},
        {"id": 3, "name": "A4 Paper", "current_stock": 20, "reorder_level": 5, "unit": "ream", "unit_price": "6.00"},
    ]


def scored_appraisal(record_id, name, score, **extra):
    """An appraisal with every criterion scored ``score``."""
    from hrms_admin.core.classifiers import APPRAISAL_CRITERIA

    record = {"id": record_id, "employee_id": f"EMP-{record_id:03d}", "name": name}
    record.update({field: score for field in APPRAISAL_CRITERIA})
    record.update(extra)
    return record


@pytest.fixture
def sample_appraisals():
    return [
        scored_appraisal(1, "Ayesha Khan", 5, department_name="Finance"),
        scored_appraisal(2, "Bilal Ahmed", 4, department_name="Operations", increment=True),
        scored_appraisal(3, "Sara Malik", 3, department_name="Finance", promotion=True,
                         proposed_designation="Senior Officer"),
    ]
