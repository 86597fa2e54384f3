"""Span enrichment hooks for the httpx instrumentation.

The instrumentation calls the request hook when the HTTP client span starts
and the response hook when the response arrives. Each header is copied onto
the span as ``http.request.header.<name>`` / ``http.response.header.<name>``,
keeping the header's wire casing.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from opentelemetry.trace import Span

REQUEST_HEADER_PREFIX = "http.request.header."
RESPONSE_HEADER_PREFIX = "http.response.header."


def _decode(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def _header_pairs(headers: Any) -> Iterable[tuple[str, str]]:
    if headers is None:
        return ()
    # httpx.Headers lowercases names on iteration; .raw keeps them as sent
    raw = getattr(headers, "raw", None)
    if raw is not None:
        return ((_decode(k), _decode(v)) for k, v in raw)
    if isinstance(headers, Mapping):
        return ((_decode(k), _decode(v)) for k, v in headers.items())
    return ((_decode(k), _decode(v)) for k, v in headers)


def header_attributes(prefix: str, headers: Any) -> dict[str, str]:
    """Map headers to span attributes; repeated headers are comma-joined."""
    attributes: dict[str, str] = {}
    for name, value in _header_pairs(headers):
        key = f"{prefix}{name}"
        if key in attributes:
            attributes[key] = f"{attributes[key]}, {value}"
        else:
            attributes[key] = value
    return attributes


def enrich_request(span: Span, request: Any) -> None:
    """Tag ``span`` with the outgoing request headers."""
    if span is None or not span.is_recording():
        return
    span.set_attributes(header_attributes(REQUEST_HEADER_PREFIX, request.headers))


def enrich_response(span: Span, request: Any, response: Any) -> None:
    """Tag ``span`` with the received response headers."""
    if span is None or not span.is_recording():
        return
    span.set_attributes(header_attributes(RESPONSE_HEADER_PREFIX, response.headers))


async def async_enrich_request(span: Span, request: Any) -> None:
    """Coroutine form of :func:`enrich_request` for ``httpx.AsyncClient``."""
    enrich_request(span, request)


async def async_enrich_response(span: Span, request: Any, response: Any) -> None:
    """Coroutine form of :func:`enrich_response` for ``httpx.AsyncClient``."""
    enrich_response(span, request, response)
