"""otel-console CLI."""

import asyncio
import sys
from typing import Optional

import httpx
import typer

from otel_console.app import run
from otel_console.core.settings import get_settings
from otel_console.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from otel_console.observability.telemetry import configure_telemetry

logger = get_logger(__name__)

app = typer.Typer(
    name="otel-console",
    help="Fetch a URL with OpenTelemetry tracing, metrics and logging.",
    add_completion=False,
)


def wait_for_enter() -> None:
    """Block until a line (or EOF) arrives on stdin."""
    sys.stdin.readline()


@app.command()
def main(
    url: Optional[str] = typer.Argument(None, help="URL to GET (defaults to a numbersapi.com fact)"),
):
    """GET URL, print the body, then wait for Enter before exiting."""
    settings = get_settings()
    configure_logging(settings)
    telemetry = configure_telemetry(settings, install_globals=True)
    bind_context(service=settings.app_name)
    target = url or settings.default_url

    try:
        body = asyncio.run(run(target, telemetry))
        typer.echo(body)

        if settings.wait_for_exit:
            wait_for_enter()
    except httpx.HTTPError:
        logger.exception("Fetch failed", url=target)
        raise
    finally:
        clear_context()
        telemetry.shutdown()


if __name__ == "__main__":
    app()
