"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass, field

from .exceptions import InvalidPatternError

# Default text substituted for every redacted span or value
REDACT_PLACEHOLDER = "[TEXT_REDACTED]"


@dataclass(frozen=True, slots=True)
class Rule:
    """A compiled expression plus the capture group to redact.

    ``group`` 0 is the whole match.  A group the expression does not define
    is rejected here; a defined group that takes no part in a particular
    match simply yields nothing for that match.
    """
    regex: re.Pattern[str]
    group: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.regex, re.Pattern) or not isinstance(self.regex.pattern, str):
            raise InvalidPatternError([self.regex], "expected a compiled str pattern")
        if not 0 <= self.group <= self.regex.groups:
            raise InvalidPatternError(
                [self.regex.pattern],
                f"group {self.group} out of range (pattern has {self.regex.groups})",
            )

    @classmethod
    def compile(cls, expression: str, group: int = 0, flags: int = 0) -> "Rule":
        """Compile ``expression`` into a Rule, surfacing bad regex as InvalidPatternError."""
        try:
            regex = re.compile(expression, flags)
        except (re.error, TypeError) as e:
            raise InvalidPatternError([expression], str(e)) from e
        return cls(regex, group)

    @property
    def pattern(self) -> str:
        return self.regex.pattern


@dataclass(frozen=True, slots=True)
class Position:
    """Where a capture's match sits in the original input."""
    line: int              # 1-based
    start_offset: int      # UTF-8 byte offset of the match start
    end_offset: int        # UTF-8 byte offset one past the match end


@dataclass(frozen=True, slots=True)
class Capture:
    """A single redacted span."""
    text: str                          # exact captured substring
    pattern: str                       # source expression of the rule that matched
    position: Position | None = None   # only when positions were requested


@dataclass(slots=True)
class RedactionResult:
    """Result of redacting a string."""
    text: str                                           # redacted text
    captures: list[Capture] = field(default_factory=list)
