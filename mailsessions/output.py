"""JSON rendering of full sessions."""
from __future__ import annotations

import json
from typing import Iterable

from mailsessions.models import SessionOut


def sessions_payload(sessions: Iterable[SessionOut]) -> list[dict]:
    return [session.model_dump(by_alias=True) for session in sessions]


def render_sessions(sessions: Iterable[SessionOut]) -> str:
    """Tab-indented JSON array with a trailing newline; ``<``, ``>`` and ``&`` stay literal."""
    return json.dumps(sessions_payload(sessions), indent="\t", ensure_ascii=False) + "\n"
