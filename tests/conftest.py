import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.services.data_service import MockDataService
from app.services.settings_store import SettingsStore


SETTINGS_ROWS = [
    {"id": 1, "key": "currency", "value": "USD", "updated_at": "2026-01-10T08:00:00+00:00"},
    {"id": 2, "key": "maintenance_mode", "value": False, "updated_at": "2026-01-10T08:00:00+00:00"},
    {"id": 3, "key": "contact", "value": {"email": "stay@villas.test", "phone": "+30 210 000"}, "updated_at": "2026-01-11T09:30:00+00:00"},
]

PAGE_VIEW_ROWS = [
    {"id": 1, "created_at": "2026-02-01T10:00:00+00:00", "path": "/", "country": "GR", "city": "Athens", "referrer": None, "user_agent": "x"},
    {"id": 2, "created_at": "2026-02-03T12:00:00+00:00", "path": "/villas/azure", "country": "DE", "city": "Berlin", "referrer": "https://google.com", "user_agent": "y"},
    {"id": 3, "created_at": "2026-02-02T18:30:00+00:00", "path": "/contact", "country": None, "city": None, "referrer": None, "user_agent": "z"},
]

DASHBOARD_SUMMARY = {
    "kpis": {"totalBookings": {"value": 4, "previousValue": 2}},
    "revenueChartData": [{"month": "Jan", "revenue": 5400}],
    "bookingAnalytics": {"conversionRate": 0, "avgBookingValue": 1350.0, "avgLengthOfStay": 4.5},
}

VISITOR_ANALYTICS = {"totalViews": 3, "pageViews": []}


@pytest.fixture
def data_service():
    """In-memory data service seeded with settings, page views and edge functions."""
    return MockDataService(
        tables={
            "settings": [dict(row) for row in SETTINGS_ROWS],
            "page_views": [dict(row) for row in PAGE_VIEW_ROWS],
        },
        functions={
            "get-dashboard-analytics": DASHBOARD_SUMMARY,
            "get-analytics": VISITOR_ANALYTICS,
        },
    )


@pytest.fixture
def settings_store(data_service: MockDataService):
    return SettingsStore(data_service, table="settings")


@pytest_asyncio.fixture
async def client(data_service: MockDataService, settings_store: SettingsStore):
    """Create test client wired to the mock data service."""
    app.state.data_service = data_service
    app.state.settings_store = settings_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    del app.state.data_service
    del app.state.settings_store
