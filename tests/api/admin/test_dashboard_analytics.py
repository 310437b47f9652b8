"""
Tests for GET /api/admin/dashboard-analytics.

Producers are swapped through dependency overrides; the default producers
are exercised against the mock data service's edge functions.
"""

import asyncio

import pytest
from httpx import AsyncClient

from app.api.deps import get_dashboard_producer, get_visitor_producer
from app.main import app
from app.services.data_service import MockDataService

URL = "/api/admin/dashboard-analytics"


def override_producers(dashboard, visitor):
    app.dependency_overrides[get_dashboard_producer] = lambda: dashboard
    app.dependency_overrides[get_visitor_producer] = lambda: visitor


def returning(value):
    async def producer():
        return value
    return producer


class TestDashboardAnalyticsSuccess:
    """Both producers return data."""

    @pytest.mark.asyncio
    async def test_combined_payload_from_edge_functions(self, client: AsyncClient):
        """Test the default producers feed a flattened payload."""
        response = await client.get(URL)

        assert response.status_code == 200
        data = response.json()
        booking = data["bookingAnalytics"]
        assert booking["avgBookingValue"] == 1350.0
        assert booking["avgLengthOfStay"] == 4.5
        assert booking["kpis"]["totalBookings"]["value"] == 4
        assert "bookingAnalytics" not in booking
        assert data["visitorAnalytics"] == {"totalViews": 3, "pageViews": []}

    @pytest.mark.asyncio
    async def test_nested_fields_win(self, client: AsyncClient):
        """Test the flattening law on the HTTP response."""
        override_producers(
            returning({"a": 1, "bookingAnalytics": {"a": 2, "b": 3}}),
            returning({"totalViews": 1}),
        )

        response = await client.get(URL)

        assert response.status_code == 200
        assert response.json()["bookingAnalytics"] == {"a": 2, "b": 3}

    @pytest.mark.asyncio
    async def test_non_object_nested_value_dropped(self, client: AsyncClient):
        """Test a bookingAnalytics array is dropped instead of failing the request."""
        override_producers(
            returning({"a": 1, "bookingAnalytics": [1, 2]}),
            returning({"totalViews": 1}),
        )

        response = await client.get(URL)

        assert response.status_code == 200
        assert response.json()["bookingAnalytics"] == {"a": 1}

    @pytest.mark.asyncio
    async def test_never_cached(self, client: AsyncClient):
        """Test every response is marked no-store."""
        response = await client.get(URL)

        assert response.headers["Cache-Control"] == "no-store"

    @pytest.mark.asyncio
    async def test_producers_run_each_request(self, client: AsyncClient):
        """Test no response is reused between requests."""
        calls = []

        async def dashboard():
            calls.append("dashboard")
            return {"requests": len(calls)}

        override_producers(dashboard, returning({"totalViews": 0, "pageViews": []}))

        first = await client.get(URL)
        second = await client.get(URL)

        assert calls == ["dashboard", "dashboard"]
        assert first.json()["bookingAnalytics"] == {"requests": 1}
        assert second.json()["bookingAnalytics"] == {"requests": 2}

    @pytest.mark.asyncio
    async def test_producers_run_concurrently(self, client: AsyncClient):
        """Test each producer can only finish while the other is in flight."""
        dashboard_started = asyncio.Event()
        visitor_started = asyncio.Event()

        async def dashboard():
            dashboard_started.set()
            await asyncio.wait_for(visitor_started.wait(), timeout=1)
            return {"a": 1}

        async def visitor():
            visitor_started.set()
            await asyncio.wait_for(dashboard_started.wait(), timeout=1)
            return {"totalViews": 0}

        override_producers(dashboard, visitor)

        response = await client.get(URL)

        assert response.status_code == 200


class TestDashboardAnalyticsFailures:
    """All-or-nothing error responses."""

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, client: AsyncClient):
        """Test a null dashboard summary with working visitor data is a 500."""
        override_producers(returning(None), returning({"totalViews": 3}))

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"message": "Couldn't generate all analytics data"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("empty", [None, {}, []])
    async def test_empty_visitor(self, client: AsyncClient, empty):
        """Test any falsy visitor result is a 500."""
        override_producers(returning({"a": 1}), returning(empty))

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"message": "Couldn't generate all analytics data"}

    @pytest.mark.asyncio
    async def test_both_empty_same_message(self, client: AsyncClient):
        """Test total failure is indistinguishable from partial failure."""
        override_producers(returning(None), returning(None))

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"message": "Couldn't generate all analytics data"}

    @pytest.mark.asyncio
    async def test_missing_edge_function(self, client: AsyncClient, data_service: MockDataService):
        """Test an edge function with no body is reported as incomplete data."""
        del data_service.functions["get-dashboard-analytics"]

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json()["message"] == "Couldn't generate all analytics data"

    @pytest.mark.asyncio
    async def test_exception_message_returned(self, client: AsyncClient):
        """Test a producer exception's message becomes the response message."""

        async def failing():
            raise RuntimeError("bookings query timed out")

        override_producers(failing, returning({"totalViews": 0}))

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"message": "bookings query timed out"}
        assert response.headers["Cache-Control"] == "no-store"

    @pytest.mark.asyncio
    async def test_exception_without_message(self, client: AsyncClient):
        """Test an exception with no message falls back to the generic text."""

        async def failing():
            raise RuntimeError()

        override_producers(returning({"a": 1}), failing)

        response = await client.get(URL)

        assert response.status_code == 500
        assert response.json() == {"message": "An internal server error occurred"}

    @pytest.mark.asyncio
    async def test_remote_function_failure(self, client: AsyncClient, data_service: MockDataService):
        """Test a data service failure in a default producer is a 500 with its message."""
        data_service.fail("get-analytics")

        response = await client.get(URL)

        assert response.status_code == 500
        assert "get-analytics" in response.json()["message"]
