"""Pattern engine: rule-driven text redaction.

Matching and substitution are two separate phases.  Every rule is run over
the *original* text and its captures are collected first; only then are the
captures applied, in discovery order, to a working copy, each one replacing
the first remaining occurrence of its text:

    engine = PatternRedactor("[X]", [Rule.compile("(foo)", 1)])
    engine.redact("foo,foo").text    # "[X],[X]"

Because matching never sees the partially redacted copy, placeholder text
inserted by one rule is never matched again by a later rule.
"""

from __future__ import annotations
import logging
import re
from typing import Iterable

from .exceptions import InvalidPatternError
from .types import REDACT_PLACEHOLDER, Capture, Position, RedactionResult, Rule

logger = logging.getLogger(__name__)


def value_rule(value: str) -> Rule:
    """Rule matching ``value`` literally, as capture group 1."""
    if not isinstance(value, str):
        raise InvalidPatternError([repr(value)], f"expected str, got {type(value).__name__}")
    try:
        regex = re.compile(f"({re.escape(value)})")
    except re.error as e:
        raise InvalidPatternError([value], str(e)) from e
    return Rule(regex, 1)


def value_rules(values: Iterable[str]) -> list[Rule]:
    """Convert every value; report all failures together."""
    rules: list[Rule] = []
    failed: list[str] = []
    for value in values:
        try:
            rules.append(value_rule(value))
        except InvalidPatternError as e:
            failed.extend(e.values)
    if failed:
        raise InvalidPatternError(failed)
    return rules


def scan_rule(text: str, rule: Rule, with_info: bool = False) -> list[Capture]:
    """Collect non-empty captures of a single rule over ``text``, in match order."""
    captures: list[Capture] = []
    cursor = _Cursor(text) if with_info else None
    for m in rule.regex.finditer(text):
        found = m.group(rule.group)
        # group did not take part in this match, or matched nothing
        if not found:
            continue
        position = cursor.position(*m.span()) if cursor else None
        captures.append(Capture(text=found, pattern=rule.pattern, position=position))
    return captures


class _Cursor:
    """Running line/byte count over ``text``.

    finditer yields matches left to right without overlap, so each
    position only encodes the text between the previous match end and
    the current match end.
    """

    __slots__ = ("_text", "_ascii", "_index", "_byte", "_line")

    def __init__(self, text: str) -> None:
        self._text = text
        self._ascii = text.isascii()
        self._index = 0
        self._byte = 0
        self._line = 1

    def position(self, start: int, end: int) -> Position:
        self._advance(start)
        line, start_byte = self._line, self._byte
        self._advance(end)
        return Position(line=line, start_offset=start_byte, end_offset=self._byte)

    def _advance(self, index: int) -> None:
        chunk = self._text[self._index:index]
        self._line += chunk.count("\n")
        if self._ascii:
            self._byte += len(chunk)
        else:
            self._byte += len(chunk.encode("utf-8", errors="surrogatepass"))
        self._index = index


class PatternRedactor:
    """Ordered rules plus a placeholder.  Immutable, safe to share across threads."""

    __slots__ = ("_placeholder", "_rules")

    def __init__(
        self,
        placeholder: str = REDACT_PLACEHOLDER,
        rules: Iterable[Rule] = (),
    ) -> None:
        self._placeholder = placeholder
        self._rules = tuple(rules)

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def redact(self, text: str, with_info: bool = False) -> RedactionResult:
        """Redact ``text``; with ``with_info`` each capture carries its Position."""
        # --- Phase 1: collect against the untouched input ---
        captures: list[Capture] = []
        for rule in self._rules:
            captures.extend(scan_rule(text, rule, with_info))

        # --- Phase 2: sequential first-occurrence substitution ---
        result = text
        for capture in captures:
            result = result.replace(capture.text, self._placeholder, 1)

        logger.debug(
            "Pattern redaction: %d rules, %d captures, %d chars",
            len(self._rules), len(captures), len(text),
        )
        return RedactionResult(text=result, captures=captures)

    def redact_str(self, text: str) -> str:
        return self.redact(text).text

    def __repr__(self) -> str:
        return f"<PatternRedactor rules={len(self._rules)} placeholder={self._placeholder!r}>"
