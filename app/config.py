from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (remote data service)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_TIMEOUT: float = 30.0

    @field_validator('SUPABASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize https://x.supabase.co/ to https://x.supabase.co."""
        if v:
            return v.rstrip('/')
        return v or None

    # Remote tables and edge functions
    SETTINGS_TABLE: str = "settings"
    PAGE_VIEWS_TABLE: str = "page_views"
    DASHBOARD_ANALYTICS_FUNCTION: str = "get-dashboard-analytics"
    VISITOR_ANALYTICS_FUNCTION: str = "get-analytics"

    # CORS
    FRONTEND_URL: str = "http://localhost:5173"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    @model_validator(mode='after')
    def validate_production(self) -> "Settings":
        """Production requires real credentials and never runs in debug."""
        if self.is_production:
            self.DEBUG = False
            if not self.supabase_configured:
                raise ValueError(
                    "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required in production"
                )
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("production", "staging")

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)

    @property
    def docs_enabled(self) -> bool:
        return not self.is_production

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
