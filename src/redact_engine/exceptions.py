"""Exception hierarchy for redact-engine.

Every error the package raises on purpose derives from ``RedactionError`` so
callers can catch one type at the boundary.
"""

from __future__ import annotations
from typing import Iterable


class RedactionError(Exception):
    """Base exception for all redact-engine errors."""


class InvalidPatternError(RedactionError):
    """One or more values/expressions could not be turned into a rule.

    ``values`` holds every offending input, not just the first one.
    """

    def __init__(self, values: Iterable[object], reason: str = "") -> None:
        self.values = [str(v) for v in values]
        self.reason = reason
        msg = f"could not parse {','.join(self.values)} to regex"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class EncodingError(RedactionError):
    """Stream input is not valid UTF-8."""


class ParseError(RedactionError):
    """Input given to a JSON entry point is not valid JSON."""

    def __init__(self, msg: str, lineno: int = 0, colno: int = 0) -> None:
        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        super().__init__(f"invalid JSON: {msg} (line {lineno}, column {colno})")


class ConfigurationError(RedactionError):
    """Raised when configuration loading or validation fails."""
