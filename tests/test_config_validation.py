"""Tests for config.py environment variable validation."""
import pytest
from pydantic import ValidationError

from app.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "development",
        "SUPABASE_URL": None,
        "SUPABASE_SERVICE_ROLE_KEY": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettingsValidation:
    """Test Settings defaults and production validation."""

    def test_development_defaults_work(self):
        """Settings should load without credentials in development."""
        s = make_settings()
        assert s.DEBUG is True
        assert s.supabase_configured is False
        assert s.SETTINGS_TABLE == "settings"
        assert s.PAGE_VIEWS_TABLE == "page_views"
        assert s.VISITOR_ANALYTICS_FUNCTION == "get-analytics"
        assert s.docs_enabled is True

    def test_supabase_url_trailing_slash_removed(self):
        """https://x.supabase.co/ should be normalized."""
        s = make_settings(SUPABASE_URL="https://villas.supabase.co/")
        assert s.SUPABASE_URL == "https://villas.supabase.co"

    def test_empty_supabase_url_is_none(self):
        """An empty URL counts as unset."""
        s = make_settings(SUPABASE_URL="")
        assert s.SUPABASE_URL is None

    def test_supabase_configured(self):
        """Both URL and key are needed."""
        s = make_settings(SUPABASE_URL="https://villas.supabase.co", SUPABASE_SERVICE_ROLE_KEY="key")
        assert s.supabase_configured is True

    def test_production_requires_credentials(self):
        """Production must not start without Supabase credentials."""
        with pytest.raises(ValidationError):
            make_settings(ENVIRONMENT="production")

    def test_production_forces_debug_off(self):
        """Production should never run in debug mode or expose docs."""
        s = make_settings(
            ENVIRONMENT="production",
            DEBUG=True,
            SUPABASE_URL="https://villas.supabase.co",
            SUPABASE_SERVICE_ROLE_KEY="key",
        )
        assert s.DEBUG is False
        assert s.is_production is True
        assert s.docs_enabled is False

    def test_staging_is_production(self):
        """is_production should detect production/staging."""
        s = make_settings(
            ENVIRONMENT="staging",
            SUPABASE_URL="https://villas.supabase.co",
            SUPABASE_SERVICE_ROLE_KEY="key",
        )
        assert s.is_production is True
