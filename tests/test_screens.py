"""
Unit tests for list screens: superseded fetches, action failures and page clamping.
"""

import asyncio

import pytest

from hrms_admin.core.exceptions import ActionError, BackendError
from hrms_admin.core.list_query import ListQuery, ListQueryConfig
from hrms_admin.services.screens import ListScreen, run_action, stationery_items_screen, stationery_usage_screen


def static_loader(records, calls=None):
    async def load():
        if calls is not None:
            calls.append(1)
        return records
    return load


class TestRefresh:

    def test_newer_refresh_supersedes_older(self):
        async def scenario():
            started = asyncio.Event()
            never = asyncio.Event()
            calls = []

            async def loader():
                calls.append(1)
                if len(calls) == 1:
                    started.set()
                    await never.wait()
                    return [{"id": "stale"}]
                return [{"id": "fresh"}]

            screen = ListScreen("test", loader, ListQueryConfig())
            first = asyncio.ensure_future(screen.refresh())
            await started.wait()
            second = await screen.refresh()
            return screen, await first, second, len(calls)

        screen, first_applied, second_applied, call_count = asyncio.run(scenario())

        assert call_count == 2
        assert first_applied is False
        assert second_applied is True
        assert screen.records == [{"id": "fresh"}]
        assert screen.loading is False

    def test_failed_fetch_keeps_previous_records(self):
        async def scenario():
            responses = [[{"id": 1}], BackendError("boom", status_code=500)]

            async def loader():
                result = responses.pop(0)
                if isinstance(result, Exception):
                    raise result
                return result

            screen = ListScreen("test", loader, ListQueryConfig())
            await screen.refresh()
            applied = await screen.refresh()
            return screen, applied

        screen, applied = asyncio.run(scenario())

        assert applied is False
        assert screen.records == [{"id": 1}]
        assert isinstance(screen.error, BackendError)
        with pytest.raises(BackendError):
            screen.raise_for_error()


class TestActions:

    def test_failed_action_becomes_action_error(self):
        async def failing():
            raise BackendError("HRMS backend error 400", status_code=400)

        with pytest.raises(ActionError) as exc_info:
            asyncio.run(run_action("issue item", failing))

        assert exc_info.value.error_code == "ACTION_FAILED"
        assert exc_info.value.message == "Failed to issue item. Please try again."
        assert exc_info.value.details == {"backend_status": 400}

    def test_successful_action_refetches(self):
        calls = []

        async def scenario():
            screen = ListScreen("test", static_loader([{"id": 1}], calls), ListQueryConfig())
            await screen.refresh()

            async def approve():
                return {"status": "approved"}

            return await screen.perform("approve request", approve)

        assert asyncio.run(scenario()) == {"status": "approved"}
        assert len(calls) == 2

    def test_failed_action_does_not_refetch(self):
        calls = []

        async def scenario():
            screen = ListScreen("test", static_loader([{"id": 1}], calls), ListQueryConfig())
            await screen.refresh()

            async def reject():
                raise BackendError("down", status_code=503)

            await screen.perform("reject request", reject)

        with pytest.raises(ActionError):
            asyncio.run(scenario())
        assert len(calls) == 1


class TestView:

    def test_stored_page_is_clamped(self):
        records = [{"id": n} for n in range(7)]
        screen = ListScreen("test", static_loader(records), ListQueryConfig(), ListQuery(page=5, page_size=3))
        asyncio.run(screen.refresh())

        page = screen.view()

        assert page.current_page == 3
        assert screen.query.page == 3

    def test_set_query(self):
        screen = ListScreen("test", static_loader([]), ListQueryConfig())
        query = screen.set_query(search_term="pens", page=2)
        assert query.search_term == "pens"
        assert screen.query.page == 2

    def test_items_are_decorated(self, backend, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        async def scenario():
            async with backend.client() as hrms:
                screen = stationery_items_screen(hrms)
                await screen.refresh()
                return screen.view()

        page = asyncio.run(scenario())

        # Default order is by name
        assert [item["name"] for item in page.items] == ["A4 Paper", "Pens", "Staplers"]
        assert [item["stock_status"] for item in page.items] == ["In Stock", "Out of Stock", "Low Stock"]
        assert page.items[1]["status_style"]["label"] == "Out of Stock"

    def test_usage_screen_scopes_to_employee(self, backend):
        backend.add("GET", "stationery_usage/", json={"stationery_usage": [{"id": 1, "status": "approved"}]})

        async def scenario():
            async with backend.client() as hrms:
                screen = stationery_usage_screen(hrms, employee_id="12")
                await screen.refresh()
                return screen.view()

        page = asyncio.run(scenario())

        assert backend.requests[0].url.params["employee"] == "12"
        assert page.items[0]["allowed_actions"] == ["issue"]
