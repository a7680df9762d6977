"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry for distributed tracing and
optionally starts the Prometheus metrics server.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode  # noqa: F401
from prometheus_client import start_http_server

logger = logging.getLogger(__name__)

_configured = False


def setup_opentelemetry() -> bool:
    """
    Configure OpenTelemetry instrumentation.

    Tracing is exported over OTLP only when OTEL_EXPORTER_OTLP_ENDPOINT is
    set. Without it the global no-op provider stays in place and spans
    cost nothing.

    Returns:
        True if an exporter was installed
    """
    global _configured  # pylint: disable=global-statement
    if _configured:
        return True

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not otlp_endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing export disabled")
        return False

    resource = Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", "device-license-service"),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
            )
        )
    )
    trace.set_tracer_provider(trace_provider)

    DjangoInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured", extra={"endpoint": otlp_endpoint})
    return True


def start_metrics_server() -> None:
    """
    Start the standalone Prometheus metrics server.

    Only runs when PROMETHEUS_PORT is set; /metrics is also served by
    Django itself.
    """
    port = os.environ.get("PROMETHEUS_PORT")
    if not port:
        return
    try:
        start_http_server(int(port), addr="0.0.0.0")
    except OSError as e:
        # Another worker already owns the port.
        logger.warning("Could not start Prometheus metrics server: %s", e)
        return
    logger.info("Prometheus metrics server started on 0.0.0.0:%s", port)


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance (no-op until a provider is installed)
    """
    return trace.get_tracer(name)
