"""
API tests for the stationery endpoints.
"""

from fastapi import status
from fastapi.testclient import TestClient

from main import app


class TestStationeryItems:
    """Tests for /api/v1/stationery/items"""

    def test_list_items_with_status(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json={"results": sample_items, "next": None})

        response = client.get("/api/v1/stationery/items", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_count"] == 3
        assert data["total_pages"] == 1
        assert data["page_window"] == [1]
        assert {i["name"]: i["stock_status"] for i in data["items"]} == {
            "Pens": "Out of Stock",
            "Staplers": "Low Stock",
            "A4 Paper": "In Stock",
        }

    def test_filter_by_stock_status(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        response = client.get("/api/v1/stationery/items", params={"stock_status": "Low Stock"}, headers=auth_headers)

        assert [i["id"] for i in response.json()["items"]] == [2]

    def test_search_and_sort(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        response = client.get(
            "/api/v1/stationery/items?search=a&sort_by=current_stock&sort_order=desc",
            headers=auth_headers
        )

        assert [i["name"] for i in response.json()["items"]] == ["A4 Paper", "Staplers"]

    def test_page_past_the_end_is_clamped(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        response = client.get("/api/v1/stationery/items?page=9&page_size=2", headers=auth_headers)

        data = response.json()
        assert data["current_page"] == 2
        assert len(data["items"]) == 1

    def test_item_stats(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        response = client.get("/api/v1/stationery/items/stats", headers=auth_headers)

        assert response.json() == {
            "total_items": 3,
            "in_stock": 1,
            "low_stock": 1,
            "out_of_stock": 1,
            "total_stock_units": 25.0,
        }

    def test_get_item(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/2/", json=sample_items[1])

        response = client.get("/api/v1/stationery/items/2", headers=auth_headers)

        data = response.json()
        assert data["stock_status"] == "Low Stock"
        assert data["priority"] == "High"
        assert data["stock_percentage"] == 100.0
        assert data["suggested_order_quantity"] == 10

    def test_get_missing_item(self, client, auth_headers):
        response = client.get("/api/v1/stationery/items/404", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_create_item(self, client, backend, auth_headers):
        backend.add("POST", "stationery_items/", json=lambda r: {"id": 9, "current_stock": 0, "reorder_level": 10, "name": "Clips"},
                    status_code=201)

        response = client.post(
            "/api/v1/stationery/items",
            json={"name": "Clips", "reorder_level": 10},
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["stock_status"] == "Out of Stock"

    def test_create_item_rejects_zero_reorder_level(self, client, auth_headers):
        response = client.post(
            "/api/v1/stationery/items",
            json={"name": "Clips", "reorder_level": 0},
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_update_item_refetches(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/1/", json=sample_items[0])
        backend.add("PUT", "stationery_items/1/", json={**sample_items[0], "current_stock": 40})

        response = client.put("/api/v1/stationery/items/1", json={"current_stock": 40}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert len(backend.sent("GET", "stationery_items/1/")) == 2
        assert b'"current_stock":40' in backend.sent("PUT", "stationery_items/1/")[0].content.replace(b" ", b"")

    def test_delete_requires_confirmation(self, client, backend, auth_headers):
        backend.add("DELETE", "stationery_items/1/", status_code=204)

        response = client.delete("/api/v1/stationery/items/1", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "CONFIRMATION_REQUIRED"
        assert backend.sent("DELETE", "stationery_items/1/") == []

    def test_delete_with_confirmation(self, client, backend, auth_headers):
        backend.add("DELETE", "stationery_items/1/", status_code=204)

        response = client.delete("/api/v1/stationery/items/1?confirm=true", headers=auth_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert len(backend.sent("DELETE", "stationery_items/1/")) == 1


class TestStockReport:

    def test_default_order_is_priority(self, client, backend, auth_headers, sample_items):
        items = list(reversed(sample_items))
        backend.add("GET", "stationery_items/", json=items)

        response = client.get("/api/v1/stationery/stock-report", headers=auth_headers)

        assert [i["priority"] for i in response.json()["items"]] == ["High", "High", "Low"]

    def test_stats(self, client, backend, auth_headers, sample_items):
        backend.add("GET", "stationery_items/", json=sample_items)

        response = client.get("/api/v1/stationery/stock-report/stats", headers=auth_headers)

        data = response.json()
        # Pens: out of stock and below half its reorder level
        assert data["critical_items"] == 2
        assert data["total_value"] == 170.0
        assert data["health_score"] == 0

    def test_stats_without_items(self, client, backend, auth_headers):
        backend.add("GET", "stationery_items/", json=[])

        response = client.get("/api/v1/stationery/stock-report/stats", headers=auth_headers)

        assert response.json()["health_score"] == 100


class TestStationeryUsage:

    def test_list_carries_allowed_actions(self, client, backend, auth_headers):
        backend.add("GET", "stationery_usage/", json={"stationery_usage": [
            {"id": 1, "status": "pending", "quantity": 2},
            {"id": 2, "status": "issued", "quantity": 1},
        ]})

        response = client.get("/api/v1/stationery/usage", headers=auth_headers)

        actions = {i["id"]: i["allowed_actions"] for i in response.json()["items"]}
        assert actions == {1: ["approve", "reject"], 2: []}

    def test_filter_by_status(self, client, backend, auth_headers):
        backend.add("GET", "stationery_usage/", json=[
            {"id": 1, "status": "pending"},
            {"id": 2, "status": "approved"},
        ])

        response = client.get("/api/v1/stationery/usage?status=approved", headers=auth_headers)

        assert [i["id"] for i in response.json()["items"]] == [2]

    def test_usage_stats(self, client, backend, auth_headers):
        backend.add("GET", "stationery_usage/", json=[
            {"id": 1, "status": "pending"},
            {"id": 2, "status": "pending"},
            {"id": 3, "status": "issued"},
        ])

        response = client.get("/api/v1/stationery/usage/stats", headers=auth_headers)

        assert response.json() == {"pending": 2, "approved": 0, "issued": 1, "rejected": 0, "total": 3}

    def test_approve_pending_request(self, client, backend, auth_headers):
        states = iter([{"id": 5, "status": "pending", "quantity": 2}, {"id": 5, "status": "approved", "quantity": 2}])
        backend.add("GET", "stationery_usage/5/", json=lambda r: next(states))
        backend.add("POST", "stationery_usage/5/approve_request/", json={"status": "approved"})

        response = client.post("/api/v1/stationery/usage/5/approve", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "approved"
        assert response.json()["allowed_actions"] == ["issue"]

    def test_issue_pending_request_is_rejected_locally(self, client, backend, auth_headers):
        backend.add("GET", "stationery_usage/5/", json={"id": 5, "status": "pending"})

        response = client.post("/api/v1/stationery/usage/5/issue", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_TRANSITION"
        assert backend.sent("POST", "stationery_usage/5/issue_item/") == []

    def test_backend_failure_surfaces_as_action_error(self, client, backend, auth_headers):
        backend.add("GET", "stationery_usage/5/", json={"id": 5, "status": "approved"})
        backend.add("POST", "stationery_usage/5/issue_item/", json={"error": "Insufficient stock"}, status_code=400)

        response = client.post("/api/v1/stationery/usage/5/issue", headers=auth_headers)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Failed to issue usage request. Please try again."

    def test_unknown_action(self, client, auth_headers):
        response = client.post("/api/v1/stationery/usage/5/cancel", headers=auth_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestStationeryTransactions:

    def test_list_with_labels(self, client, backend, auth_headers):
        backend.add("GET", "stationery_transactions/", json=[
            {"id": 1, "transaction_type": "order", "quantity": 10, "created_at": "2024-03-01T10:00:00"},
            {"id": 2, "transaction_type": "damage", "quantity": 1, "created_at": "2024-03-05T10:00:00"},
        ])

        response = client.get("/api/v1/stationery/transactions", headers=auth_headers)

        items = response.json()["items"]
        # Newest first by default
        assert [i["id"] for i in items] == [2, 1]
        assert items[0]["transaction_label"] == "Damage"
        assert items[1]["transaction_color"] == "#10b981"

    def test_create_transaction_validates_type(self, client, auth_headers):
        response = client.post(
            "/api/v1/stationery/transactions",
            json={"stationery_item": 1, "transaction_type": "gift", "quantity": 1},
            headers=auth_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestAuthentication:

    def test_missing_token_without_service_token(self):

        # Real dependency: no Authorization header and no service token configured
        with TestClient(app) as raw_client:
            response = raw_client.get("/api/v1/stationery/items")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_code"] == "MISSING_TOKEN"
