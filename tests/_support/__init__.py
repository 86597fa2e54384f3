"""
Test support utilities for otel-console tests.

Helpers that are not fixtures but are shared across test modules.
"""

from __future__ import annotations

import httpx
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace import ReadableSpan

try:
    from opentelemetry.sdk._logs.export import InMemoryLogRecordExporter
except ImportError:  # SDK releases before the exporter was renamed
    from opentelemetry.sdk._logs.export import InMemoryLogExporter as InMemoryLogRecordExporter

SAMPLE_BODY = '{"text": "42 is the answer", "number": 42, "found": true, "type": "math"}'


class RecordingHandler:
    """MockTransport handler that records every request it serves."""

    def __init__(
        self,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        text: str = SAMPLE_BODY,
        error: type[httpx.TransportError] | None = None,
    ):
        self.status_code = status_code
        self.headers = headers or {"Content-Type": "application/json"}
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated transport failure", request=request)
        return httpx.Response(self.status_code, headers=self.headers, text=self.text)


def metric_names(reader: InMemoryMetricReader) -> list[str]:
    """Names of every metric collected by ``reader``, as exported."""
    data = reader.get_metrics_data()
    if data is None:
        return []
    return [
        metric.name
        for resource_metrics in data.resource_metrics
        for scope_metrics in resource_metrics.scope_metrics
        for metric in scope_metrics.metrics
    ]


def counter_value(reader: InMemoryMetricReader, name: str) -> float:
    """Sum every data point of metric ``name`` collected by ``reader``.

    The SDK lowercases instrument names, so ``name`` is matched case-insensitively.
    """
    data = reader.get_metrics_data()
    if data is None:
        return 0
    total = 0
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name == name.lower():
                    total += sum(point.value for point in metric.data.data_points)
    return total


def spans_named(spans, name: str) -> list[ReadableSpan]:
    return [span for span in spans if span.name == name]


def http_spans(spans, fetch_span: ReadableSpan) -> list[ReadableSpan]:
    """Spans whose parent is ``fetch_span`` (the httpx client spans)."""
    return [
        span
        for span in spans
        if span.parent is not None and span.parent.span_id == fetch_span.context.span_id
    ]
