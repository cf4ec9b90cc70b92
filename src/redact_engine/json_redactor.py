"""Tree redactor: redact JSON values by key name or by dotted path.

Paths are object keys joined with ``.`` from the document root; arrays add
no segment and are never walked.  A path ending in ``.*`` redacts that key's
whole value, whatever its shape.

Given ``{"a": {"b": {"key": 1}, "foo": 2, "key": 3}, "key": 4}``:

    path "a.foo"  ->  only a.foo is replaced
    path "a.*"    ->  the whole of "a" becomes the placeholder
    key  "key"    ->  a.b.key, a.key and key are all replaced
"""

from __future__ import annotations
import json
import logging
from typing import Any, Iterable

from .exceptions import ParseError
from .types import REDACT_PLACEHOLDER

logger = logging.getLogger(__name__)


def split_paths(paths: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split declared paths into (exact paths, subtree prefixes).

    A path ending in ``*`` is a prefix and is stored with ``.*`` removed.
    """
    exact: list[str] = []
    prefixes: list[str] = []
    for path in paths:
        if path.endswith("*"):
            prefixes.append(path.replace(".*", ""))
        else:
            exact.append(path)
    return exact, prefixes


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, e.lineno, e.colno) from e


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class JsonRedactor:
    """Keys, exact paths and path prefixes plus a placeholder.  Immutable."""

    __slots__ = ("_placeholder", "_keys", "_paths", "_path_prefixes")

    def __init__(
        self,
        placeholder: str = REDACT_PLACEHOLDER,
        keys: Iterable[str] = (),
        paths: Iterable[str] = (),
        path_prefixes: Iterable[str] = (),
    ) -> None:
        self._placeholder = placeholder
        self._keys = frozenset(keys)
        self._paths = frozenset(paths)
        self._path_prefixes = frozenset(path_prefixes)

    @classmethod
    def from_declared(
        cls,
        placeholder: str = REDACT_PLACEHOLDER,
        keys: Iterable[str] = (),
        paths: Iterable[str] = (),
    ) -> "JsonRedactor":
        """Build from user-facing path declarations (``"a.b"``, ``"a.*"``)."""
        exact, prefixes = split_paths(paths)
        return cls(placeholder, keys, exact, prefixes)

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def keys(self) -> frozenset[str]:
        return self._keys

    @property
    def paths(self) -> frozenset[str]:
        return self._paths

    @property
    def path_prefixes(self) -> frozenset[str]:
        return self._path_prefixes

    @property
    def is_empty(self) -> bool:
        return not (self._keys or self._paths or self._path_prefixes)

    def redact_str(self, text: str) -> str:
        """Parse, redact and re-serialize (compact; formatting is not preserved).

        Raises ParseError when ``text`` is not JSON.
        """
        value = parse_json(text)
        self.redact_value(value)
        return dump_json(value)

    def redact_value(self, value: Any) -> None:
        """Redact a parsed JSON tree in place.  Non-object roots are left alone."""
        if isinstance(value, dict):
            self._walk(value, "")

    def _walk(self, obj: dict[str, Any], path: str) -> None:
        for key, value in obj.items():
            child = f"{path}.{key}" if path else key

            if child in self._paths or child in self._path_prefixes:
                obj[key] = self._placeholder
            elif key in self._keys:
                if isinstance(value, list):
                    value[:] = [self._placeholder] * len(value)
                else:
                    obj[key] = self._placeholder
            elif isinstance(value, dict):
                self._walk(value, child)

    def __repr__(self) -> str:
        return (
            f"<JsonRedactor keys={len(self._keys)} paths={len(self._paths)} "
            f"prefixes={len(self._path_prefixes)}>"
        )
