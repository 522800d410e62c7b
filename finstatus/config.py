"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    backend_api_base: str = "http://localhost:3001"
    notification_webhook_url: str = "http://localhost:8002/mock-notifications"

    # Service
    service_name: str = "finstatus-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Schedule views
    default_upcoming_days: int = 30
    default_reminder_days_ahead: int = 3


settings = Settings()
