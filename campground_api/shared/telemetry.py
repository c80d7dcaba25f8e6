# campground_api/shared/telemetry.py
import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from campground_api import __version__
from campground_api.shared.config import Settings

logger = logging.getLogger(__name__)

# Comma-separated URL patterns FastAPIInstrumentor skips.
UNTRACED_URLS = "health"


def build_resource(settings: Settings) -> Resource:
    """Identity attached to every span this process exports."""
    return Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "service.version": __version__,
        "deployment.environment": settings.APP_ENV.value,
        "campground.image_backend": settings.IMAGE_STORAGE_BACKEND.value,
    })


def setup_telemetry(settings: Settings) -> Optional[TracerProvider]:
    """
    Installs an OTLP-exporting tracer provider and returns it, so the caller
    can flush it on shutdown. Returns None when no endpoint is configured.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("Telemetry disabled: No OTEL_EXPORTER_OTLP_ENDPOINT configured.")
        return None

    logger.info(
        "Initializing Telemetry for service: %s %s", settings.OTEL_SERVICE_NAME, __version__
    )

    provider = TracerProvider(resource=build_resource(settings))
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/")
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces")))

    if settings.DEBUG:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider


def shutdown_telemetry(provider: Optional[TracerProvider]) -> None:
    """Flush pending spans; a no-op when telemetry is disabled."""
    if provider is not None:
        provider.shutdown()


def instrument_fastapi(app, settings: Settings) -> None:
    """
    Traces incoming HTTP requests (except /health) when export is on.
    """
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)


def get_tracer(name: str):
    """Tracer for manual spans in services and adapters."""
    return trace.get_tracer(name, __version__)
