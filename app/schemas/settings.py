from pydantic import BaseModel, Field, JsonValue
from typing import Optional


class SettingRow(BaseModel):
    """One row of the remote settings table."""
    key: str
    value: JsonValue = None
    updated_at: Optional[str] = None


class SettingUpdate(BaseModel):
    """Schema for writing a setting value."""
    value: JsonValue = Field(..., description="Any JSON value")


class SettingResponse(BaseModel):
    key: str
    value: JsonValue = None


class SettingsState(BaseModel):
    """Settings store state as seen by the admin console."""
    settings: dict[str, JsonValue] = Field(default_factory=dict)
    isLoading: bool = False
    error: Optional[str] = None


class SettingsUpdateResult(SettingsState):
    success: bool
