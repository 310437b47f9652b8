"""
Settings store - local cache of the remote key/value settings table.

One store is created per process (see app.main lifespan) around the shared
data service and handed to routes through a dependency. Reads are
synchronous lookups into the cache; loads and saves go to the remote table.

Overlapping operations are not serialized. Each one suspends at its remote
call and resumes independently, so `is_loading`/`error` reflect whichever
completion landed last. An update only ever merges its own key, so the
mapping itself stays consistent.

Usage:
    store = SettingsStore(data_service)
    await store.fetch_settings()
    currency = store.get_setting("currency")
    ok = await store.update_setting("currency", "EUR")
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.config import settings as app_settings
from app.schemas.settings import SettingRow, SettingsState
from app.services.data_service import DataService

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch settings"
UPDATE_ERROR_MESSAGE = "Failed to update setting"


class SettingsStore:
    """Cache of setting key -> JSON value with loading/error flags."""

    def __init__(self, data_service: DataService, table: Optional[str] = None):
        self._data_service = data_service
        self.table = table or app_settings.SETTINGS_TABLE

        self.settings: Dict[str, Any] = {}
        self.is_loading: bool = False
        self.error: Optional[str] = None

    async def fetch_settings(self) -> None:
        """Replace the whole cache with the rows currently in the remote table."""
        self.is_loading = True
        self.error = None

        try:
            rows = await self._data_service.select(self.table)
            settings_map = {
                setting.key: setting.value
                for setting in (SettingRow.model_validate(row) for row in rows)
            }
        except Exception:
            logger.exception("Error fetching settings")
            self.is_loading = False
            self.error = FETCH_ERROR_MESSAGE
            return

        self.settings = settings_map
        self.is_loading = False
        logger.debug(f"Loaded {len(settings_map)} settings")

    async def update_setting(self, key: str, value: Any) -> bool:
        """
        Upsert one setting and merge it into the cache.

        Returns:
            True when the remote write succeeded, False otherwise
        """
        self.is_loading = True
        self.error = None

        record = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            await self._data_service.upsert(self.table, record, on_conflict="key")
        except Exception:
            logger.exception(f"Error updating setting {key}")
            self.is_loading = False
            self.error = UPDATE_ERROR_MESSAGE
            return False

        # Merge into whatever mapping is current now, not the one seen at call time
        self.settings = {**self.settings, key: value}
        self.is_loading = False
        logger.info(f"Setting updated: {key}")
        return True

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def has_setting(self, key: str) -> bool:
        return key in self.settings

    def clear_error(self) -> None:
        self.error = None

    def snapshot(self) -> SettingsState:
        """Copy of the current state for API responses."""
        return SettingsState(
            settings=dict(self.settings),
            isLoading=self.is_loading,
            error=self.error,
        )
