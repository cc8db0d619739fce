"""Errors raised while fetching or decoding a stats export.

All of them are confined to the scope being collected; ``ScopeCollector``
turns them into an unhealthy ``ScopeHealth``.
"""

from typing import Optional


class StatsExportError(Exception):
    """Base class for failures collecting a single scope."""


class TransportUnavailable(StatsExportError):
    """The stats endpoint could not be connected to, written to or read from."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"stats endpoint {endpoint} unavailable: {reason}")


class DecodeError(StatsExportError):
    """The response stream did not follow the export format."""


class MalformedHeader(DecodeError):
    """The header line is missing or has too few fields."""


class ColumnCountMismatch(DecodeError):
    """A data row is not as wide as the header declares."""

    def __init__(self, expected: int, actual: int, line_number: int) -> None:
        self.expected = expected
        self.actual = actual
        self.line_number = line_number
        super().__init__(
            f"line {line_number}: expected {expected} fields, got {actual}"
        )


class ValueParseFailure(DecodeError):
    """A value field is not a valid floating point number."""

    def __init__(self, value: str, column: str, line_number: Optional[int] = None) -> None:
        self.value = value
        self.column = column
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}cannot parse {value!r} for column {column!r}")


class PrematureEndOfStream(DecodeError):
    """The stream ended in the middle of a line."""

    def __init__(self, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(f"line {line_number}: stream ended before end of line")
