from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    database_url: str = "sqlite:///./project_tracker.db"

    # Cookie sessions
    session_secret: str = "change-me-in-production"
    session_ttl_seconds: int = 7 * 24 * 60 * 60
    session_cookie: str = "project_tracker_session"
    session_https_only: bool = False

    # Bootstrap admin, created on startup when missing
    admin_email: str = "admin@example.com"
    admin_password: str = "admin123"

    bcrypt_rounds: int = 12
    due_soon_days: int = 7

    log_level: str = "INFO"
    cors_origins: str = ""

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
