"""Run the CLI with ``python -m otel_console``."""

from otel_console.cli import app

app()
