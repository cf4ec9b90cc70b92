"""YAML/dict config loader for redact-engine.

Supports loading from a YAML file or a plain dict (for embedding
in a larger config).

Example YAML:

    redact_engine:
      placeholder: "[TEXT_REDACTED]"
      patterns:
        - test: "password=(\\\\S+)"   # regex; "pattern"/"regex" also accepted
          group: 1                   # capture group to redact, default 0
      values:                        # literal strings, escaped for you
        - hunter2
      keys:                          # JSON keys redacted at any depth
        - token
      paths:                         # JSON dotted paths; ".*" = whole subtree
        - auth.*
        - user.email

A pattern whose group is larger than the number of groups in its
expression is rejected when the Redactor is created, so one such entry
fails the whole config with InvalidPatternError rather than being skipped.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .redactor import Redactor, RedactorConfig
from .types import REDACT_PLACEHOLDER

logger = logging.getLogger(__name__)

_EXPRESSION_KEYS = ("test", "pattern", "regex")


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = _mapping(data, "config")
    # Support nested under "redact_engine" key or flat
    if "redact_engine" in data:
        data = _mapping(data["redact_engine"], "redact_engine")

    placeholder = data.get("placeholder", REDACT_PLACEHOLDER)
    if not isinstance(placeholder, str):
        raise ConfigurationError("placeholder must be a string")

    return {
        "placeholder": placeholder,
        "patterns": [_normalize_pattern(p) for p in _list_of(data, "patterns")],
        "values": [str(v) for v in _list_of(data, "values")],
        "keys": [str(k) for k in _list_of(data, "keys")],
        "paths": [str(p) for p in _list_of(data, "paths")],
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e

    cfg = load_config(raw)
    logger.info(
        "Configuration loaded from %s: %d patterns, %d values, %d keys, %d paths",
        path, len(cfg["patterns"]), len(cfg["values"]), len(cfg["keys"]), len(cfg["paths"]),
    )
    return cfg


def build_config(config: dict[str, Any]) -> RedactorConfig:
    """Turn a normalized config dict into a RedactorConfig.

    Raises InvalidPatternError for expressions or values that do not compile.
    """
    redactor_config = RedactorConfig(placeholder=config["placeholder"])
    for p in config["patterns"]:
        redactor_config.add_pattern(p["test"], p["group"])
    if config["values"]:
        redactor_config.add_values(config["values"])
    for key in config["keys"]:
        redactor_config.add_key(key)
    for path in config["paths"]:
        redactor_config.add_path(path)
    return redactor_config


def create_redactor(config: dict[str, Any]) -> Redactor:
    """Create a fully configured Redactor from a config dict."""
    return build_config(load_config(config)).build()


def _mapping(data: Any, name: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{name} must be a mapping, got {type(data).__name__}")
    return data


def _list_of(data: dict[str, Any], section: str) -> list[Any]:
    items = data.get(section) or []
    if not isinstance(items, list):
        raise ConfigurationError(f"'{section}' must be a list, got {type(items).__name__}")
    return items


def _normalize_pattern(entry: Any) -> dict[str, Any]:
    if isinstance(entry, str):
        return {"test": entry, "group": 0}
    if not isinstance(entry, dict):
        raise ConfigurationError(f"pattern entry must be a mapping or string: {entry!r}")

    expression = next((entry[k] for k in _EXPRESSION_KEYS if k in entry), None)
    if not isinstance(expression, str):
        raise ConfigurationError(f"pattern entry needs a 'test' expression: {entry!r}")

    group = entry.get("group", 0)
    # bool is an int subclass; reject it explicitly
    if not isinstance(group, int) or isinstance(group, bool) or group < 0:
        raise ConfigurationError(f"pattern group must be a non-negative integer: {entry!r}")
    return {"test": expression, "group": group}
