"""
Unit tests for the HRMS backend client.
"""

import asyncio

import httpx
import pytest

from hrms_admin.core.exceptions import AuthenticationError, BackendError, NotFoundError
from hrms_admin.core.hrms_client import HRMSClient, extract_records


def run(coro_fn, hrms):
    """Run ``coro_fn(hrms)`` to completion and close the client."""
    async def scenario():
        async with hrms:
            return await coro_fn(hrms)
    return asyncio.run(scenario())


class TestHeaders:

    def test_token_and_csrf_are_sent(self, backend):
        backend.add("GET", "employees/", json=[])
        run(lambda c: c.fetch_all("employees/"), backend.client(token="abc", csrf_token="xyz"))

        request = backend.requests[0]
        assert request.headers["Authorization"] == "Token abc"
        assert request.headers["X-CSRFToken"] == "xyz"

    def test_csrf_header_omitted_without_cookie(self, backend):
        backend.add("GET", "employees/", json=[])
        run(lambda c: c.fetch_all("employees/"), backend.client(token="abc"))

        assert "X-CSRFToken" not in backend.requests[0].headers

    def test_json_body_sets_content_type(self, backend):
        backend.add("POST", "holidays/", json={"id": 1})
        run(lambda c: c.create("holidays/", {"name": "Eid"}), backend.client())

        assert backend.requests[0].headers["Content-Type"] == "application/json"


class TestFetchAll:

    def test_follows_next_links(self, backend):
        backend.add("GET", "stationery_items/", json={
            "results": [{"id": 1}, {"id": 2}],
            "next": "http://hrms.test/api/stationery_items/?page=2",
        })
        backend.add("GET", "stationery_items/?page=2", json={"results": [{"id": 3}], "next": None})

        records = run(lambda c: c.fetch_all("stationery_items/"), backend.client())

        assert [r["id"] for r in records] == [1, 2, 3]
        assert len(backend.requests) == 2

    def test_repeated_next_link_stops(self, backend):
        backend.add("GET", "holidays/", json={
            "results": [{"id": 1}],
            "next": "http://hrms.test/api/holidays/?page=2",
        })
        backend.add("GET", "holidays/?page=2", json={
            "results": [{"id": 2}],
            "next": "http://hrms.test/api/holidays/?page=2",
        })

        records = run(lambda c: c.fetch_all("holidays/"), backend.client())

        assert [r["id"] for r in records] == [1, 2]

    def test_record_envelopes(self):
        assert extract_records([{"id": 1}]) == [{"id": 1}]
        assert extract_records({"data": [{"id": 2}]}) == [{"id": 2}]
        assert extract_records({"stationery_usage": [{"id": 3}]}) == [{"id": 3}]
        assert extract_records({"detail": "nothing"}) == []
        assert extract_records(None) == []


class TestErrorMapping:

    def test_not_found(self, backend):
        with pytest.raises(NotFoundError):
            run(lambda c: c.retrieve("employees/", 99), backend.client())

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_rejected_credentials(self, backend, status_code):
        backend.add("GET", "employees/", json={"detail": "Invalid token."}, status_code=status_code)
        with pytest.raises(AuthenticationError):
            run(lambda c: c.get("employees/"), backend.client())

    def test_server_error_keeps_status(self, backend):
        backend.add("POST", "stationery_usage/7/issue_item/", json={"error": "Insufficient stock"}, status_code=400)

        with pytest.raises(BackendError) as exc_info:
            run(lambda c: c.action("stationery_usage/", 7, "issue_item"), backend.client())

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["backend"] == {"error": "Insufficient stock"}

    def test_unreachable_backend(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        hrms = HRMSClient("http://hrms.test/api/", transport=httpx.MockTransport(refuse))
        with pytest.raises(BackendError) as exc_info:
            run(lambda c: c.get("employees/"), hrms)

        assert exc_info.value.error_code == "BACKEND_UNREACHABLE"

    def test_ping_reports_unreachable_backend(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        hrms = HRMSClient("http://hrms.test/api/", transport=httpx.MockTransport(refuse))
        assert run(lambda c: c.ping(), hrms) is False


class TestWrites:

    def test_delete_with_empty_response(self, backend):
        backend.add("DELETE", "holidays/4/", status_code=204)
        assert run(lambda c: c.delete("holidays/", 4), backend.client()) is None

    def test_action_posts_to_detail_route(self, backend):
        backend.add("POST", "performanse_appraisals/3/approve_increment/", json={"status": "ok"})
        result = run(lambda c: c.action("performanse_appraisals/", 3, "approve_increment"), backend.client())

        assert result == {"status": "ok"}
        assert backend.requests[0].url.path == "/api/performanse_appraisals/3/approve_increment/"

    def test_upload_sends_multipart(self, backend):
        backend.add("POST", "letter_send/", json={"id": 1})
        run(
            lambda c: c.upload("letter_send/", {"name": "Ali"}, {"letter_file": ("offer.pdf", b"%PDF-1.4", "application/pdf")}),
            backend.client()
        )

        request = backend.requests[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b"offer.pdf" in request.content
