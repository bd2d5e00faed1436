"""Incremental assembly of per-session records from decoded log lines."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

from mailsessions import config
from mailsessions.errors import TimestampParseError
from mailsessions.models import SessionRecord
from mailsessions.parsers.lines import DecodedLine
from mailsessions.timestamps import compute_duration

logger = logging.getLogger("mailsessions.assembler")


class FieldKind(str, Enum):
    CLIENT = "client"
    MESSAGE_ID = "message-id"
    FROM = "from"
    TO = "to"
    STATUS = "status"

    @classmethod
    def from_key(cls, key: str) -> FieldKind | None:
        try:
            return cls(key)
        except ValueError:
            return None


class SessionAssembler:
    """Owns the session id -> SessionRecord mapping for one run.

    Records are created on first sighting and only ever mutated; nothing is
    evicted until the caller asks for :meth:`full_sessions`.
    """

    def __init__(
        self,
        duration_order: str | None = None,
        on_timestamp_error: str | None = None,
    ) -> None:
        self.duration_order = duration_order or config.DURATION_ORDER
        self.on_timestamp_error = on_timestamp_error or config.ON_TIMESTAMP_ERROR
        if self.duration_order not in config.DURATION_ORDERS:
            raise ValueError(f"unknown duration order {self.duration_order!r}")
        if self.on_timestamp_error not in config.TIMESTAMP_ERROR_POLICIES:
            raise ValueError(f"unknown timestamp error policy {self.on_timestamp_error!r}")
        self._sessions: dict[str, SessionRecord] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(self._sessions.values())

    def get(self, session_id: str) -> SessionRecord | None:
        return self._sessions.get(session_id)

    def ingest(self, timestamp: str, session_id: str, key: str, value: str) -> SessionRecord:
        record = self._sessions.get(session_id)
        if record is None:
            record = SessionRecord(sessionId=session_id)
            self._sessions[session_id] = record

        kind = FieldKind.from_key(key)
        if kind is FieldKind.CLIENT:
            record.startTimestamp = timestamp
            record.client = value
        elif kind is FieldKind.MESSAGE_ID:
            record.messageId = value
        elif kind is FieldKind.FROM:
            record.from_ = value
        elif kind is FieldKind.TO:
            record.to = value
        elif kind is FieldKind.STATUS:
            record.status = value
            record.endTimestamp = timestamp
            self._set_duration(record)
        else:
            # Unknown keys are accepted and ignored.
            pass
        return record

    def ingest_line(self, decoded: DecodedLine) -> SessionRecord:
        return self.ingest(decoded.timestamp, decoded.session_id, decoded.key, decoded.value)

    def full_sessions(self) -> list[SessionRecord]:
        return [record for record in self._sessions.values() if record.is_full()]

    def _set_duration(self, record: SessionRecord) -> None:
        if not record.startTimestamp or not record.endTimestamp or record.timestampInvalid:
            return
        try:
            record.duration = compute_duration(
                record.startTimestamp,
                record.endTimestamp,
                self.duration_order,
            )
        except TimestampParseError as exc:
            if self.on_timestamp_error != "incomplete":
                raise
            record.duration = ""
            record.timestampInvalid = True
            logger.warning("Session %s left incomplete: %s", record.sessionId, exc)
