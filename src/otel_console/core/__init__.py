"""Core configuration."""

from otel_console.core.settings import DEFAULT_URL, Settings, get_settings

__all__ = ["DEFAULT_URL", "Settings", "get_settings"]
