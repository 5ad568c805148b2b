"""Observability for the API and the assistant agent.

``OBSERVABILITY`` selects the backend:

- ``"logfire"`` — Pydantic Logfire (set ``LOGFIRE_TOKEN`` env var)
- ``"otel"``    — OpenTelemetry with an OTLP HTTP exporter
- ``"off"``     — nothing is instrumented (default)

``setup_telemetry`` instruments the FastAPI app and hands back the
``InstrumentationSettings`` the agent factory needs, so HTTP spans and
model-call spans go to the same tracer provider.  Backend packages come
from the ``observability`` extra and are imported only when selected.
"""

from __future__ import annotations

from fastapi import FastAPI
from loguru import logger
from pydantic_ai.models.instrumented import InstrumentationSettings

from bodegoes_assistant import __version__
from bodegoes_assistant.config import Settings

MODES = ("off", "logfire", "otel")


def is_observability_active(settings: Settings) -> bool:
    """Return True when a tracing backend is selected."""
    return settings.observability.lower() in ("logfire", "otel")


def get_instrumentation_settings(settings: Settings) -> InstrumentationSettings | None:
    """Agent instrumentation for the selected backend, or None when off."""
    if not is_observability_active(settings):
        return None
    return InstrumentationSettings()


def setup_telemetry(app: FastAPI, settings: Settings) -> InstrumentationSettings | None:
    """Instrument *app* and return the matching agent instrumentation.

    Unknown modes are logged and treated as ``"off"``.
    """
    mode = settings.observability.lower()

    if mode not in MODES:
        logger.warning("Unknown observability mode '{}', disabling", mode)
        return None
    if mode == "off":
        logger.info("Observability disabled (OBSERVABILITY=off)")
        return None

    if mode == "logfire":
        _setup_logfire(app, settings)
    else:
        _setup_otel(app, settings)
    return get_instrumentation_settings(settings)


def _setup_logfire(app: FastAPI, settings: Settings) -> None:
    import logfire

    logfire.configure(service_name=settings.otel_service_name, service_version=__version__)
    logfire.instrument_fastapi(app)
    logger.info("Logfire enabled | service={}", settings.otel_service_name)


def _setup_otel(app: FastAPI, settings: Settings) -> None:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": settings.otel_service_name, "service.version": __version__}
        )
    )
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=f"{settings.otel_exporter_otlp_endpoint}/v1/traces")
        )
    )
    if settings.otel_console_exporter:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    # Global provider: InstrumentationSettings() picks it up for agent spans
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app)

    logger.info(
        "OpenTelemetry enabled | service={} | endpoint={}",
        settings.otel_service_name,
        settings.otel_exporter_otlp_endpoint,
    )
