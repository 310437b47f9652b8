import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.deps import DashboardProducer, VisitorProducer
from app.schemas.analytics import DashboardAnalyticsResponse, MessageResponse
from app.services.analytics_service import build_analytics_payload, gather_analytics

logger = logging.getLogger(__name__)

router = APIRouter()

INCOMPLETE_ANALYTICS_MESSAGE = "Couldn't generate all analytics data"
GENERIC_ERROR_MESSAGE = "An internal server error occurred"

# Always computed fresh
NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": message}, headers=NO_STORE_HEADERS)


@router.get(
    "/dashboard-analytics",
    response_model=DashboardAnalyticsResponse,
    responses={500: {"model": MessageResponse}},
)
async def get_dashboard_analytics(
    dashboard_producer: DashboardProducer,
    visitor_producer: VisitorProducer,
):
    """Combined booking and visitor analytics for the admin dashboard."""
    try:
        dashboard, visitor = await gather_analytics(dashboard_producer, visitor_producer)

        # Either source empty: all-or-nothing, the cause is not reported
        if not dashboard or not visitor:
            logger.warning(
                f"Incomplete analytics: dashboard={'ok' if dashboard else 'empty'}, "
                f"visitor={'ok' if visitor else 'empty'}"
            )
            return _error(INCOMPLETE_ANALYTICS_MESSAGE)

        payload = build_analytics_payload(dashboard, visitor)
        return JSONResponse(content=payload, headers=NO_STORE_HEADERS)
    except Exception as e:
        logger.exception("Error generating dashboard analytics")
        return _error(str(e) or GENERIC_ERROR_MESSAGE)
