"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Budget Planner"
    log_level: str = "INFO"
    currency_symbol: str = "$"

    # Database
    database_url: str = "sqlite:///./data/db.sqlite"

    # Statement imports
    max_import_bytes: int = 5 * 1024 * 1024

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
