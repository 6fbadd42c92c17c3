# lexicon_store/shared/observability.py
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from lexicon_store.shared.config import settings

def setup_tracing() -> TracerProvider:
    """
    Configures OpenTelemetry for the lexicon store.

    1. Sets the Global Tracer Provider.
    2. Configures an Exporter (Console in debug mode, otherwise spans only feed trace ids to the logs).
    """

    # 1. Define Resource (Service Name identity)
    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "service.environment": settings.APP_ENV.value,
    })

    # 2. Initialize the Tracer Provider
    provider = TracerProvider(resource=resource)

    # 3. Configure the Exporter
    if settings.DEBUG:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # Set the global provider
    trace.set_tracer_provider(provider)
    return provider

def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in Use Cases.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("my_custom_logic"):
            ...
    """
    return trace.get_tracer(name)
