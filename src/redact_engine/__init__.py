"""redact-engine: rule-driven redaction of text and JSON."""

from .redactor import Redactor, RedactorConfig
from .patterns import PatternRedactor, value_rule, value_rules
from .json_redactor import JsonRedactor
from .config import create_redactor, load_config, load_from_yaml
from .logfilter import RedactingFilter
from .types import REDACT_PLACEHOLDER, Capture, Position, RedactionResult, Rule
from .exceptions import (
    ConfigurationError,
    EncodingError,
    InvalidPatternError,
    ParseError,
    RedactionError,
)

__all__ = [
    "Redactor", "RedactorConfig",
    "PatternRedactor", "value_rule", "value_rules",
    "JsonRedactor",
    "create_redactor", "load_config", "load_from_yaml",
    "RedactingFilter",
    "REDACT_PLACEHOLDER", "Capture", "Position", "RedactionResult", "Rule",
    "RedactionError", "InvalidPatternError", "EncodingError", "ParseError",
    "ConfigurationError",
]
__version__ = "0.1.0"
