from pydantic import BaseModel, JsonValue
from typing import Any, Optional


class PageViewRecord(BaseModel):
    """A single tracked page view, newest first when listed."""
    id: int
    created_at: str
    path: str
    country: Optional[str] = None
    city: Optional[str] = None
    referrer: Optional[str] = None


class VisitorAnalyticsResponse(BaseModel):
    """Body returned by the get-analytics edge function."""
    totalViews: int
    pageViews: list[PageViewRecord]


class DashboardAnalyticsResponse(BaseModel):
    """Combined admin dashboard payload."""
    bookingAnalytics: dict[str, Any]
    visitorAnalytics: JsonValue


class MessageResponse(BaseModel):
    message: str


class FunctionErrorResponse(BaseModel):
    error: str
