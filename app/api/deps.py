"""
FastAPI Dependencies

Provides dependency injection for the process-wide data service, the
settings store, and the analytics producers used by the dashboard route.
Tests override the producers through `app.dependency_overrides`.
"""

from functools import partial
from typing import Annotated

from fastapi import Depends, Request

from app.services.analytics_service import (
    AnalyticsProducer,
    get_dashboard_analytics,
    get_visitor_analytics,
)
from app.services.data_service import DataService
from app.services.settings_store import SettingsStore


def get_data_service(request: Request) -> DataService:
    """The data service created in the app lifespan."""
    return request.app.state.data_service


def get_settings_store(request: Request) -> SettingsStore:
    """The single settings store for this process."""
    return request.app.state.settings_store


def get_dashboard_producer(
    data_service: Annotated[DataService, Depends(get_data_service)],
) -> AnalyticsProducer:
    return partial(get_dashboard_analytics, data_service)


def get_visitor_producer(
    data_service: Annotated[DataService, Depends(get_data_service)],
) -> AnalyticsProducer:
    return partial(get_visitor_analytics, data_service)


# Type aliases for dependency injection
DataServiceDep = Annotated[DataService, Depends(get_data_service)]
SettingsStoreDep = Annotated[SettingsStore, Depends(get_settings_store)]
DashboardProducer = Annotated[AnalyticsProducer, Depends(get_dashboard_producer)]
VisitorProducer = Annotated[AnalyticsProducer, Depends(get_visitor_producer)]
