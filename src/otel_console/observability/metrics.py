"""OpenTelemetry metrics configuration."""

from opentelemetry.metrics import Counter, Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

from otel_console.core.settings import Settings


def build_metric_readers(settings: Settings) -> list[MetricReader]:
    """One reader per exporter named in ``settings.metric_exporters``."""
    readers: list[MetricReader] = []

    for name in settings.metric_exporters:
        if name == "console":
            readers.append(
                PeriodicExportingMetricReader(
                    ConsoleMetricExporter(),
                    export_interval_millis=settings.metrics_export_interval_ms,
                )
            )
        elif name == "otlp":
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

            readers.append(
                PeriodicExportingMetricReader(
                    OTLPMetricExporter(
                        endpoint=settings.otlp_endpoint, insecure=settings.otlp_insecure
                    ),
                    export_interval_millis=settings.metrics_export_interval_ms,
                )
            )
        elif name == "prometheus":
            from opentelemetry.exporter.prometheus import PrometheusMetricReader
            from prometheus_client import start_http_server

            start_http_server(settings.prometheus_port)
            readers.append(PrometheusMetricReader())

    return readers


def build_meter_provider(
    settings: Settings,
    resource: Resource,
    readers: list[MetricReader] | None = None,
) -> MeterProvider:
    """Create a MeterProvider; explicit ``readers`` replace the configured ones."""
    if readers is None:
        readers = build_metric_readers(settings)
    return MeterProvider(resource=resource, metric_readers=readers)


def create_request_counter(meter: Meter, settings: Settings) -> Counter:
    """Counter incremented once per outbound request."""
    return meter.create_counter(
        settings.counter_name,
        unit="{request}",
        description="Number of outbound HTTP requests made by the fetcher",
    )
