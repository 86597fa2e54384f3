"""OpenTelemetry tracing configuration."""

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from otel_console.core.settings import Settings


def build_resource(settings: Settings) -> Resource:
    """Describe this service to every exporter."""
    return Resource.create(
        {
            "service.name": settings.app_name,
            "service.version": settings.app_version,
        }
    )


def build_tracer_provider(
    settings: Settings,
    resource: Resource,
    exporters: list[SpanExporter] | None = None,
) -> TracerProvider:
    """Create a TracerProvider wired to the configured span exporters.

    The console exporter prints each span as it ends. The OTLP exporter
    batches spans for the collector at ``settings.otlp_endpoint``. Passing
    ``exporters`` skips the settings and attaches them synchronously, which
    is what tests do with an in-memory exporter.
    """
    provider = TracerProvider(resource=resource)

    if exporters is not None:
        for exporter in exporters:
            provider.add_span_processor(SimpleSpanProcessor(exporter))
        return provider

    for name in settings.trace_exporters:
        if name == "console":
            provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        elif name == "otlp":
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

            exporter = OTLPSpanExporter(
                endpoint=settings.otlp_endpoint, insecure=settings.otlp_insecure
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))

    return provider
