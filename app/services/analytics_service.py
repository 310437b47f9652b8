"""
Admin analytics service.

Booking KPIs and visitor analytics are computed remotely by edge functions;
this module fetches them and shapes the combined dashboard payload.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from app.config import settings
from app.services.data_service import DataService

logger = logging.getLogger(__name__)

BOOKING_ANALYTICS_KEY = "bookingAnalytics"

# Producer signature used by the dashboard route
AnalyticsProducer = Callable[[], Awaitable[Optional[Any]]]


async def get_dashboard_analytics(data_service: DataService) -> Optional[Dict[str, Any]]:
    """Fetch the booking dashboard summary (KPIs, charts, nested bookingAnalytics)."""
    return await data_service.invoke_function(settings.DASHBOARD_ANALYTICS_FUNCTION)


async def get_visitor_analytics(data_service: DataService) -> Optional[Any]:
    """Fetch visitor analytics (total views and page views)."""
    return await data_service.invoke_function(settings.VISITOR_ANALYTICS_FUNCTION)


def flatten_dashboard_analytics(summary: Dict[str, Any]) -> Dict[str, Any]:
    """
    Lift the nested bookingAnalytics fields to the top level of the summary.

    Nested values win over top-level fields with the same name, and the
    bookingAnalytics container itself is dropped. The input is not modified.
    A summary or bookingAnalytics value that is not an object contributes
    no fields.
    """
    flattened = dict(summary) if isinstance(summary, Mapping) else {}
    nested = flattened.get(BOOKING_ANALYTICS_KEY)
    if isinstance(nested, Mapping):
        flattened.update(nested)
    flattened.pop(BOOKING_ANALYTICS_KEY, None)
    return flattened


def build_analytics_payload(dashboard: Dict[str, Any], visitor: Any) -> Dict[str, Any]:
    return {
        "bookingAnalytics": flatten_dashboard_analytics(dashboard),
        "visitorAnalytics": visitor,
    }


async def gather_analytics(
    dashboard_producer: AnalyticsProducer,
    visitor_producer: AnalyticsProducer,
) -> Tuple[Optional[Any], Optional[Any]]:
    """Run both producers concurrently; the first exception propagates."""
    dashboard, visitor = await asyncio.gather(dashboard_producer(), visitor_producer())
    return dashboard, visitor
