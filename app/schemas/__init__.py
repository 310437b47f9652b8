from app.schemas.settings import (
    SettingRow,
    SettingUpdate,
    SettingResponse,
    SettingsState,
    SettingsUpdateResult,
)
from app.schemas.analytics import (
    PageViewRecord,
    VisitorAnalyticsResponse,
    DashboardAnalyticsResponse,
    MessageResponse,
    FunctionErrorResponse,
)

__all__ = [
    "SettingRow",
    "SettingUpdate",
    "SettingResponse",
    "SettingsState",
    "SettingsUpdateResult",
    "PageViewRecord",
    "VisitorAnalyticsResponse",
    "DashboardAnalyticsResponse",
    "MessageResponse",
    "FunctionErrorResponse",
]
