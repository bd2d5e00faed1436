"""Decode raw mail log lines into (timestamp, session id, key, value)."""
from __future__ import annotations

import re
from typing import NamedTuple

from mailsessions.errors import MalformedField, MalformedLine

# Whitespace as the log writer emits it; U+00A0 and friends are not separators.
_WHITESPACE_RUN = re.compile(r"[\t\n\f\r ]+")


class DecodedLine(NamedTuple):
    timestamp: str
    session_id: str
    key: str
    value: str


def normalize_line(line: str) -> str:
    """Drop one line terminator and collapse whitespace runs to one space.

    Only a final LF and a single CR before it are terminators; any other CR
    counts as whitespace.
    """
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return _WHITESPACE_RUN.sub(" ", line)


def decode_line(line: str) -> DecodedLine:
    """Decode ``<timestamp> <sessionId> <key>=<value>``.

    Leading or trailing whitespace produces empty tokens, so such lines are
    rejected just like lines with too few or too many tokens. Only the first
    ``=`` separates key from value.
    """
    normalized = normalize_line(line)
    tokens = normalized.split(" ")
    if len(tokens) != 3:
        raise MalformedLine(normalized)

    timestamp, session_id, field_spec = tokens
    key, sep, value = field_spec.partition("=")
    if not sep:
        raise MalformedField(field_spec)
    return DecodedLine(timestamp, session_id, key, value)
