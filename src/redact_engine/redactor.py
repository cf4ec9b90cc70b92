"""Redactor — the main API.  Patterns first, then JSON keys/paths.

Usage:
    from redact_engine import RedactorConfig

    redactor = (
        RedactorConfig()
        .add_pattern(r"password=(\\S+)", group=1)
        .add_values(["hunter2"])
        .add_key("token")
        .add_path("auth.*")
        .build()
    )                                   # reusable, thread-safe

    redactor.redact("password=abc")     # "password=[TEXT_REDACTED]"
    redactor.redact_json('{"token": "x", "note": "hunter2"}')
    # '{"token":"[TEXT_REDACTED]","note":"[TEXT_REDACTED]"}'

JSON entry points always run the pattern rules over the raw document text
before the key/path walk, so a literal secret is masked wherever it appears,
including under keys that are not targeted.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import IO, Any, Iterable

from .exceptions import EncodingError
from .json_redactor import JsonRedactor, dump_json, parse_json
from .patterns import PatternRedactor, value_rule, value_rules
from .types import REDACT_PLACEHOLDER, RedactionResult, Rule

logger = logging.getLogger(__name__)


@dataclass
class RedactorConfig:
    """Configuration for the Redactor.

    Append-only: every ``add_*`` method returns ``self`` so calls chain.
    Nothing is validated late; bad expressions or values fail in the
    ``add_*`` call that introduced them.
    """
    placeholder: str = REDACT_PLACEHOLDER
    rules: list[Rule] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)
    # Declared JSON paths; "a.*" marks a subtree
    paths: list[str] = field(default_factory=list)

    def add_rule(self, rule: Rule) -> "RedactorConfig":
        self.rules.append(rule)
        return self

    def add_rules(self, rules: Iterable[Rule]) -> "RedactorConfig":
        self.rules.extend(rules)
        return self

    def add_pattern(self, expression: str, group: int = 0, flags: int = 0) -> "RedactorConfig":
        """Compile and add a rule.  Raises InvalidPatternError."""
        return self.add_rule(Rule.compile(expression, group, flags))

    def add_value(self, value: str) -> "RedactorConfig":
        """Redact every occurrence of a literal string.  Raises InvalidPatternError."""
        return self.add_rule(value_rule(value))

    def add_values(self, values: Iterable[str]) -> "RedactorConfig":
        """Add literal values; on failure none are added and all bad values are reported."""
        return self.add_rules(value_rules(values))

    def add_key(self, key: str) -> "RedactorConfig":
        self.keys.append(key)
        return self

    def add_path(self, path: str) -> "RedactorConfig":
        self.paths.append(path)
        return self

    def build(self) -> "Redactor":
        return Redactor(self)


class Redactor:
    """Facade over the pattern engine and the JSON tree redactor.

    Takes a snapshot of the config, so later changes to the config do not
    affect an existing Redactor.
    """

    __slots__ = ("_patterns", "_json")

    def __init__(self, config: RedactorConfig | None = None) -> None:
        config = config or RedactorConfig()
        self._patterns = PatternRedactor(config.placeholder, config.rules)
        self._json = JsonRedactor.from_declared(config.placeholder, config.keys, config.paths)
        logger.info(
            "Redactor built: %d rules, %d keys, %d paths",
            len(config.rules), len(config.keys), len(config.paths),
        )

    @property
    def placeholder(self) -> str:
        return self._patterns.placeholder

    @property
    def patterns(self) -> PatternRedactor:
        return self._patterns

    @property
    def json(self) -> JsonRedactor:
        return self._json

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def redact(self, text: str) -> str:
        """Redact a string."""
        return self._patterns.redact(text).text

    def redact_with_info(self, text: str) -> RedactionResult:
        """Redact a string, reporting every capture with its position."""
        return self._patterns.redact(text, with_info=True)

    def redact_reader(self, stream: IO[Any]) -> str:
        """Read ``stream`` to the end and redact it.  Raises EncodingError."""
        return self.redact(_read_all(stream))

    def redact_reader_with_info(self, stream: IO[Any]) -> RedactionResult:
        return self.redact_with_info(_read_all(stream))

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def redact_json(self, text: str) -> str:
        """Redact a JSON document.  Raises ParseError.

        The output is re-serialized compactly; key order is kept but
        whitespace is not.
        """
        value = parse_json(self.redact(text))
        if not self._json.is_empty:
            self._json.redact_value(value)
        return dump_json(value)

    def redact_json_value(self, value: Any) -> Any:
        """Redact an already-parsed JSON value, returning a new value."""
        return parse_json(self.redact_json(dump_json(value)))

    def __repr__(self) -> str:
        return f"<Redactor {self._patterns!r} {self._json!r}>"


def _read_all(stream: IO[Any]) -> str:
    data = stream.read()
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"input is not valid UTF-8: {e}") from e
