"""
get-analytics edge function

Returns every recorded page view, newest first, with the total count.
Only GET is allowed; everything else gets 405.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.deps import DataServiceDep
from app.config import settings
from app.schemas.analytics import FunctionErrorResponse, VisitorAnalyticsResponse

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_VIEW_COLUMNS = "id, created_at, path, country, city, referrer"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.api_route(
    "/get-analytics",
    methods=ALL_METHODS,
    response_model=VisitorAnalyticsResponse,
    responses={
        405: {"model": FunctionErrorResponse},
        500: {"model": FunctionErrorResponse},
    },
)
async def get_analytics(request: Request, data_service: DataServiceDep):
    if request.method != "GET":
        return _error(405, "Method Not Allowed")

    try:
        page_views = await data_service.select(
            settings.PAGE_VIEWS_TABLE,
            columns=PAGE_VIEW_COLUMNS,
            order="created_at",
            ascending=False,
        )
        analytics = VisitorAnalyticsResponse(
            totalViews=len(page_views),
            pageViews=page_views,
        )
    except Exception:
        logger.exception("Error fetching page views")
        return _error(500, "Internal Server Error")

    return analytics
