"""Top-level program flow: root span around one instrumented fetch."""

import httpx

from otel_console.fetch import InstrumentedFetcher
from otel_console.observability.telemetry import Telemetry


async def run(url: str, telemetry: Telemetry, client: httpx.AsyncClient | None = None) -> str:
    """Fetch ``url`` under a ``main`` root span and return the body."""
    with telemetry.tracer.start_as_current_span("main"):
        async with InstrumentedFetcher(telemetry, client=client) as fetcher:
            return await fetcher.fetch(url)
