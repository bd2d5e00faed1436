"""Session assembly API."""
from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from mailsessions.errors import SessionLogError
from mailsessions.models import SessionOut
from mailsessions.pipeline import assemble_lines, collect_full_sessions

logger = logging.getLogger("mailsessions.api")

sessions_router = APIRouter(prefix="/api/sessions", tags=["sessions"])


class AssembleRequest(BaseModel):
    lines: list[str] = Field(default_factory=list)
    text: str = ""
    durationOrder: Optional[Literal["elapsed", "legacy"]] = None
    onTimestampError: Optional[Literal["abort", "incomplete"]] = None

    def log_lines(self) -> list[str]:
        if self.lines:
            return self.lines
        lines = self.text.split("\n")
        # A trailing newline ends the last line, it does not start an empty one.
        if lines and lines[-1] == "":
            lines.pop()
        return lines


@sessions_router.post("/assemble", response_model=list[SessionOut])
async def assemble_sessions(payload: AssembleRequest):
    if payload.lines and payload.text:
        raise HTTPException(status_code=422, detail="Provide either lines or text, not both")
    try:
        assembler = assemble_lines(
            payload.log_lines(),
            duration_order=payload.durationOrder,
            on_timestamp_error=payload.onTimestampError,
            source="api",
        )
    except SessionLogError as exc:
        logger.info("Rejected log body: %s", exc)
        raise HTTPException(
            status_code=422,
            detail={"kind": exc.kind, "message": str(exc), "line": exc.line_number},
        ) from exc
    return collect_full_sessions(assembler, source="api")
