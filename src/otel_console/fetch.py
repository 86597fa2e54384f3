"""Instrumented HTTP fetch."""

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from otel_console.observability.enrichment import async_enrich_request, async_enrich_response
from otel_console.observability.logging import get_logger
from otel_console.observability.telemetry import Telemetry

logger = get_logger(__name__)

CALLING_EVENT = "Calling API."
PARSING_EVENT = "Parsing response."


class InstrumentedFetcher:
    """
    GET a URL inside a ``fetch`` span.

    Every call adds one to the request counter and records a "calling" and a
    "parsing" event on the span. The httpx instrumentation creates the HTTP
    client span underneath it and tags that span with the request and
    response headers.

    Usage:
        async with InstrumentedFetcher(telemetry) as fetcher:
            body = await fetcher.fetch("https://example.com")
    """

    def __init__(
        self,
        telemetry: Telemetry,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.telemetry = telemetry
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else telemetry.settings.http_timeout_seconds
            )
        self.client = client

        HTTPXClientInstrumentor.instrument_client(
            self.client,
            tracer_provider=telemetry.tracer_provider,
            request_hook=async_enrich_request,
            response_hook=async_enrich_response,
        )

    async def fetch(self, url: str | None = None) -> str:
        """Return the body of ``url`` as text.

        Raises:
            httpx.HTTPError: transport failure or non-2xx status. The span is
                closed with the exception recorded before this propagates.
        """
        url = url or self.telemetry.settings.default_url
        logger.info("Starting fetch", url=url)

        with self.telemetry.tracer.start_as_current_span(
            "fetch", attributes={"url": url}
        ) as span:
            self.telemetry.request_counter.add(1)
            span.add_event(CALLING_EVENT)
            response = await self.client.get(url)
            response.raise_for_status()
            span.add_event(PARSING_EVENT)
            body = response.text
            logger.info(
                "Ending fetch", url=url, status_code=response.status_code, size=len(body)
            )

        return body

    async def aclose(self) -> None:
        HTTPXClientInstrumentor.uninstrument_client(self.client)
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "InstrumentedFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
