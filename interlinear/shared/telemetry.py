# interlinear/shared/telemetry.py
import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from interlinear import __version__
from interlinear.shared.config import settings

logger = structlog.get_logger()


def setup_telemetry(app_name: str = settings.OTEL_SERVICE_NAME):
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup (api or cli).
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return

    logger.info("telemetry_init", service=app_name)

    resource = Resource.create(attributes={
        "service.name": app_name,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    trace_provider = TracerProvider(resource=resource)
    otlp_exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(trace_provider)


def instrument_fastapi(app):
    """
    Auto-instruments the FastAPI application to trace incoming HTTP requests.
    """
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)


def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in specific modules.
    """
    return trace.get_tracer(name)
