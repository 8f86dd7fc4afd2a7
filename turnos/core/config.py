from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration read from environment variables."""

    app_name: str = Field(default="Turnos Dashboard")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Queue backend
    backend_base_url: str = Field(default="http://localhost:3000/api")
    backend_token: str | None = Field(default=None)
    backend_timeout_seconds: float = Field(default=10.0, gt=0)

    # Refresh and board sizes
    poll_interval_seconds: float = Field(default=5.0, gt=0)
    poll_on_startup: bool = Field(default=True)
    waiting_board_limit: int | None = Field(default=12, ge=0)
    attention_board_limit: int | None = Field(default=None, ge=0)
    attention_waiting_limit: int | None = Field(default=8, ge=0)
    dashboard_waiting_limit: int | None = Field(default=10, ge=0)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="turnos-dashboard")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()
