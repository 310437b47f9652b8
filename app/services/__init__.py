# Services module
from app.services.data_service import DataService, MockDataService
from app.services.settings_store import SettingsStore

__all__ = [
    "DataService",
    "MockDataService",
    "SettingsStore",
]
