"""Single-pass fold of a mail log into full sessions."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable

from mailsessions.assembler import SessionAssembler
from mailsessions.errors import LogInputError, SessionLogError
from mailsessions.models import SessionOut
from mailsessions.observability import (
    record_decode_failure,
    record_lines,
    record_sessions_emitted,
    start_span,
)
from mailsessions.parsers.lines import decode_line

logger = logging.getLogger("mailsessions.pipeline")


def assemble_lines(
    lines: Iterable[str],
    *,
    duration_order: str | None = None,
    on_timestamp_error: str | None = None,
    source: str = "stream",
) -> SessionAssembler:
    """Decode and fold every line, stopping at the first failure.

    The failing exception is re-raised with its 1-based line number attached;
    the partially built assembler is discarded.
    """
    assembler = SessionAssembler(duration_order=duration_order, on_timestamp_error=on_timestamp_error)
    started = time.perf_counter()
    line_number = 0
    with start_span("mailsessions.assemble", {"source": source}):
        try:
            for line_number, line in enumerate(lines, start=1):
                assembler.ingest_line(decode_line(line))
        except SessionLogError as exc:
            exc.at_line(line_number)
            record_decode_failure(exc.kind, source=source)
            record_lines("error", line_number, (time.perf_counter() - started) * 1000, source=source)
            raise

    elapsed_ms = (time.perf_counter() - started) * 1000
    record_lines("success", line_number, elapsed_ms, source=source)
    logger.debug("Folded %d lines into %d sessions in %.1fms", line_number, len(assembler), elapsed_ms)
    return assembler


def check_log_path(path: str | Path) -> Path:
    log_path = Path(path)
    if not log_path.exists():
        raise LogInputError(str(path), "specified log file does not exist")
    if log_path.is_dir():
        raise LogInputError(str(path), "specified log path is not a file")
    return log_path


def assemble_file(
    path: str | Path,
    *,
    duration_order: str | None = None,
    on_timestamp_error: str | None = None,
) -> SessionAssembler:
    log_path = check_log_path(path)
    try:
        # Split on LF only; a lone CR stays inside its line.
        handle = log_path.open("r", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise LogInputError(str(path), f"can't open logs file - {exc}") from exc
    with handle:
        try:
            return assemble_lines(
                handle,
                duration_order=duration_order,
                on_timestamp_error=on_timestamp_error,
                source=log_path.name,
            )
        except UnicodeDecodeError as exc:
            raise LogInputError(str(path), f"can't read logs file - {exc}") from exc


def collect_full_sessions(assembler: SessionAssembler, *, source: str = "stream") -> list[SessionOut]:
    sessions = [record.to_output() for record in assembler.full_sessions()]
    record_sessions_emitted(len(sessions), source=source)
    logger.info("%d of %d sessions are full", len(sessions), len(assembler))
    return sessions
