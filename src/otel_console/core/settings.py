"""Application settings with Pydantic."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URL = "http://numbersapi.com/random/math?json"


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service identity
    app_name: str = "SampleApp"
    app_version: str = "1.0.0.0"

    # HTTP
    default_url: str = DEFAULT_URL
    http_timeout_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Exporters
    trace_exporters: list[Literal["console", "otlp"]] = ["console", "otlp"]
    metric_exporters: list[Literal["console", "otlp", "prometheus"]] = ["console"]
    log_exporters: list[Literal["console", "otlp"]] = ["console"]
    otlp_endpoint: str = "http://localhost:4317"
    otlp_insecure: bool = True
    metrics_export_interval_ms: int = 60_000
    prometheus_port: int = 9464

    # Process lifecycle
    wait_for_exit: bool = True

    @property
    def counter_name(self) -> str:
        """Name of the request counter instrument."""
        return f"{self.app_name}-counter"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
