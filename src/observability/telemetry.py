"""OpenTelemetry SDK setup for the Assistant Relay.

Without this setup the module-level tracers and meters stay no-ops, which
is what the tests rely on.
"""

import logging

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from application.settings import Settings

log = logging.getLogger(__name__)


def configure_telemetry(app: FastAPI, settings: Settings) -> None:
    """Install tracer and meter providers and instrument the FastAPI app.

    Args:
        app: The application to instrument
        settings: Application settings (otel_* fields)
    """
    if not settings.otel_enabled:
        log.debug("OpenTelemetry disabled")
        return

    resource = Resource.create({"service.name": "assistant-relay", "service.version": settings.app_version})

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_endpoint, insecure=True)))
    if settings.otel_console_export:
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=settings.otel_endpoint, insecure=True))
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[metric_reader]))

    if settings.otel_instrument_fastapi:
        FastAPIInstrumentor.instrument_app(app)

    log.info(f"📡 OpenTelemetry configured (endpoint: {settings.otel_endpoint})")
