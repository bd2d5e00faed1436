"""Errors raised while decoding and assembling mail log sessions."""
from __future__ import annotations


class SessionLogError(ValueError):
    """Base class for every fatal failure of a run."""

    kind = "session_log_error"

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        super().__init__(self._render())

    def _render(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"

    def at_line(self, line_number: int) -> "SessionLogError":
        """Attach the 1-based input line number, keeping the first one set."""
        if self.line_number is None:
            self.line_number = line_number
            self.args = (self._render(),)
        return self


class MalformedLine(SessionLogError):
    """Raised when a line does not hold exactly three tokens."""

    kind = "malformed_line"

    def __init__(self, line: str, *, line_number: int | None = None) -> None:
        self.line = line
        super().__init__(f"expected 3 tokens in line '{line}'", line_number=line_number)


class MalformedField(SessionLogError):
    """Raised when the field fragment has no key=value separator."""

    kind = "malformed_field"

    def __init__(self, fragment: str, *, line_number: int | None = None) -> None:
        self.fragment = fragment
        super().__init__(f"should be key and value in '{fragment}'", line_number=line_number)


class TimestampParseError(SessionLogError):
    kind = "timestamp_parse_error"

    def __init__(self, value: str, *, line_number: int | None = None) -> None:
        self.value = value
        super().__init__(f"cannot parse timestamp '{value}'", line_number=line_number)


class LogInputError(SessionLogError):
    """Raised before any line is read when the input path is unusable."""

    kind = "log_input_error"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(reason)
