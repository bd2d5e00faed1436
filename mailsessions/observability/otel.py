"""OpenTelemetry wiring for mailsessions runs and the HTTP API."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any

from mailsessions import config

logger = logging.getLogger("mailsessions.observability")


_initialized = False
_enabled = False
_tracer: Any | None = None
_trace_provider: Any | None = None
_meter_provider: Any | None = None
_fastapi_instrumentor: Any | None = None

_lines_counter: Any | None = None
_run_latency_hist: Any | None = None
_decode_failure_counter: Any | None = None
_sessions_counter: Any | None = None


def _normalize_otlp_endpoint(base_endpoint: str, signal_path: str) -> str:
    endpoint = (base_endpoint or "").strip()
    if not endpoint:
        return ""
    if endpoint.endswith(signal_path):
        return endpoint
    if endpoint.endswith("/"):
        endpoint = endpoint[:-1]
    if endpoint.endswith("/v1"):
        return f"{endpoint}{signal_path[3:]}"
    return f"{endpoint}{signal_path}"


def initialize(app: Any | None = None) -> None:
    global _initialized, _enabled, _tracer, _trace_provider, _meter_provider, _fastapi_instrumentor
    global _lines_counter, _run_latency_hist, _decode_failure_counter, _sessions_counter

    if _initialized:
        if _enabled and app and _fastapi_instrumentor:
            _fastapi_instrumentor.instrument_app(app)
        return

    _initialized = True

    if not config.OTEL_ENABLED:
        logger.debug("OpenTelemetry disabled (MAILSESSIONS_OTEL_ENABLED=false)")
        return

    try:
        from opentelemetry import metrics, trace
        from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError as exc:
        logger.warning("OpenTelemetry dependencies unavailable: %s", exc)
        return

    traces_endpoint = _normalize_otlp_endpoint(config.OTEL_ENDPOINT, "/v1/traces")
    metrics_endpoint = _normalize_otlp_endpoint(config.OTEL_ENDPOINT, "/v1/metrics")
    service_name = config.OTEL_SERVICE_NAME or "mailsessions"

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.namespace": "mailsessions",
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=traces_endpoint or None)))
    trace.set_tracer_provider(trace_provider)
    tracer = trace.get_tracer("mailsessions")

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=metrics_endpoint or None)
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)
    meter = metrics.get_meter("mailsessions")

    _lines_counter = meter.create_counter(
        "mailsessions_lines_total",
        unit="1",
        description="Log lines folded into session state",
    )
    _run_latency_hist = meter.create_histogram(
        "mailsessions_run_latency_ms",
        unit="ms",
        description="Wall time of one assembly pass",
    )
    _decode_failure_counter = meter.create_counter(
        "mailsessions_decode_failures_total",
        unit="1",
        description="Fatal decode and timestamp failures",
    )
    _sessions_counter = meter.create_counter(
        "mailsessions_sessions_emitted_total",
        unit="1",
        description="Full sessions emitted",
    )

    _trace_provider = trace_provider
    _meter_provider = meter_provider
    _tracer = tracer
    _enabled = True

    if app:
        try:
            from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
        except ImportError as exc:
            logger.warning("FastAPI instrumentation unavailable: %s", exc)
        else:
            _fastapi_instrumentor = FastAPIInstrumentor()
            _fastapi_instrumentor.instrument_app(app)

    logger.info(
        "OpenTelemetry initialized (service=%s endpoint=%s)",
        service_name,
        config.OTEL_ENDPOINT,
    )


def shutdown(app: Any | None = None) -> None:
    global _enabled
    if not _initialized:
        return
    try:
        if app and _fastapi_instrumentor:
            _fastapi_instrumentor.uninstrument_app(app)
    except Exception as exc:  # noqa: BLE001
        logger.debug("FastAPI uninstrument failed: %s", exc)
    for provider in (_meter_provider, _trace_provider):
        if provider is None:
            continue
        try:
            provider.shutdown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Telemetry provider shutdown failed: %s", exc)
    _enabled = False


@contextmanager
def start_span(name: str, attributes: dict[str, Any] | None = None):
    if not _enabled or _tracer is None:
        yield None
        return
    with _tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)
        yield span


def record_lines(result: str, count: int, duration_ms: float, *, source: str) -> None:
    labels = {
        "result": result or "unknown",
        "source": source or "unknown",
    }
    if _enabled and _lines_counter is not None and count > 0:
        _lines_counter.add(int(count), labels)
    if _enabled and _run_latency_hist is not None:
        _run_latency_hist.record(max(0.0, float(duration_ms)), labels)


def record_decode_failure(kind: str, *, source: str) -> None:
    labels = {
        "kind": kind or "unknown",
        "source": source or "unknown",
    }
    if _enabled and _decode_failure_counter is not None:
        _decode_failure_counter.add(1, labels)


def record_sessions_emitted(count: int, *, source: str) -> None:
    safe_count = max(0, int(count))
    if safe_count == 0:
        return
    if _enabled and _sessions_counter is not None:
        _sessions_counter.add(safe_count, {"source": source or "unknown"})
