"""Observability helpers."""

from mailsessions.observability.otel import (
    initialize,
    shutdown,
    start_span,
    record_lines,
    record_decode_failure,
    record_sessions_emitted,
)

__all__ = [
    "initialize",
    "shutdown",
    "start_span",
    "record_lines",
    "record_decode_failure",
    "record_sessions_emitted",
]
