"""
Telemetry infrastructure setup.

This module provides OpenTelemetry configuration for tracing scrape runs.
"""

import logging
import os
import sys

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

# Get logger for this module
logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def tracing_enabled() -> bool:
    """Tracing is opt-in for a command line tool."""
    return os.getenv("OTEL_TRACES_ENABLED", "false").lower() in _TRUTHY


def setup_opentelemetry() -> None:
    """
    Initialize OpenTelemetry tracing.

    Configuration is controlled by environment variables:
    - OTEL_TRACES_ENABLED: Enable/disable tracing (default: false)
    - OTEL_SERVICE_NAME: Service name (default: sitescraper)
    - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP endpoint (default: http://localhost:4318)
    - OTEL_TRACES_CONSOLE: Also print finished spans to stderr (default: false)
    """
    if not tracing_enabled():
        logger.debug("OpenTelemetry tracing is disabled")
        return

    service_name = os.getenv("OTEL_SERVICE_NAME", "sitescraper")
    resource = Resource(attributes={SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")

    try:
        otlp_exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

        if os.getenv("OTEL_TRACES_CONSOLE", "false").lower() in _TRUTHY:
            provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))

        trace.set_tracer_provider(provider)

        # Instrument logging to correlate logs with traces
        LoggingInstrumentor().instrument(set_logging_format=False)

        logger.info(
            "OpenTelemetry initialized: service=%s, endpoint=%s",
            service_name,
            otlp_endpoint,
        )
    except Exception as e:
        logger.warning("Failed to initialize OpenTelemetry: %s", str(e))


def get_tracer():  # type: ignore
    """Get configured OpenTelemetry tracer"""
    return trace.get_tracer(__name__)
