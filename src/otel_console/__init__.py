"""otel-console - an HTTP fetch instrumented with OpenTelemetry."""

__version__ = "1.0.0"

from otel_console.app import run
from otel_console.fetch import InstrumentedFetcher

__all__ = ["InstrumentedFetcher", "run", "__version__"]
