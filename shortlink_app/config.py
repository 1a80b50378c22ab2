from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False  # True swaps the 500 handler for tracebacks

    # Application
    app_name: str = "Shortlink Service"
    app_version: str = "1.0.0"

    # Short links are rendered as f"{base_url}/shorturls/{shortcode}"
    base_url: str = "http://127.0.0.1:8000"

    # Shortcode rules
    short_code_length: int = Field(6, ge=4)  # Length of auto-generated codes
    custom_code_min_length: int = 4
    default_validity_minutes: int = 30

    # Short code generation strategy
    short_code_strategy: str = "random"  # Options: "random"

    # Audit log sink (best-effort, fire-and-forget)
    audit_backend: str = "http"  # Options: "http", "null"
    audit_log_url: Optional[str] = None  # No URL means events are discarded
    audit_stack: str = "backend"
    audit_timeout_seconds: float = 2.0
    audit_queue_name: str = "audit_events"
    audit_batch_size: int = 50
    audit_poll_interval: float = 0.5  # Seconds between empty polls

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
