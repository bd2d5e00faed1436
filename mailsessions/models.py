"""Pydantic models for assembled mail sessions and their JSON output."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ── Accumulator ─────────────────────────────────────────────────────


class SessionRecord(BaseModel):
    """In-progress session, mutated field by field as lines arrive."""

    model_config = ConfigDict(populate_by_name=True)

    sessionId: str
    startTimestamp: str = ""
    endTimestamp: str = ""
    duration: str = ""
    client: str = ""
    messageId: str = ""
    from_: str = Field(default="", alias="from")
    to: str = ""
    status: str = ""
    # Set when a captured timestamp failed to parse and the run keeps going.
    timestampInvalid: bool = False

    def is_full(self) -> bool:
        if self.timestampInvalid:
            return False
        return all(
            (
                self.startTimestamp,
                self.duration,
                self.client,
                self.messageId,
                self.sessionId,
                self.status,
                self.from_,
                self.to,
            )
        )

    def to_output(self) -> SessionOut:
        return SessionOut(
            time=SessionTime(start=self.startTimestamp, duration=self.duration),
            sessionid=self.sessionId,
            client=self.client,
            messageid=self.messageId,
            address=SessionAddress(from_=self.from_, to=self.to),
            status=self.status,
        )


# ── Output ──────────────────────────────────────────────────────────


class SessionTime(BaseModel):
    start: str = ""
    duration: str = ""


class SessionAddress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(default="", alias="from")
    to: str = ""


class SessionOut(BaseModel):
    time: SessionTime
    sessionid: str
    client: str = ""
    messageid: str = ""
    address: SessionAddress
    status: str = ""
