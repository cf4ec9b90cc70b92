"""CLI interface for redact-engine.

Usage:
    # Redact plain text (stdin: any UTF-8 text, stdout: redacted text)
    echo 'string to redact: foo,bar' | \
        redact-engine --pattern '(bar)' --group 1 text

    # Same, with match details as JSON
    echo 'foo,bar' | redact-engine --value bar text --info

    # Redact a JSON document by key / path, using rules from a config file
    echo '{"auth": {"token": "x"}, "user": "bob"}' | \
        redact-engine --config redact.yaml json --key token --path user

Rules from --config come first, then --pattern, then --value.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import build_config, load_config, load_from_yaml
from .exceptions import RedactionError
from .redactor import Redactor, RedactorConfig
from .types import RedactionResult

logger = logging.getLogger(__name__)


def _build_config(args: argparse.Namespace) -> RedactorConfig:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.placeholder is not None:
        cfg["placeholder"] = args.placeholder
    config = build_config(cfg)
    for expression in args.pattern:
        config.add_pattern(expression, args.group)
    if args.value:
        config.add_values(args.value)
    return config


def _result_to_dict(result: RedactionResult) -> dict:
    captures = []
    for c in result.captures:
        entry = {"text": c.text, "pattern": c.pattern}
        if c.position is not None:
            entry.update(
                line=c.position.line,
                start_offset=c.position.start_offset,
                end_offset=c.position.end_offset,
            )
        captures.append(entry)
    return {"text": result.text, "captures": captures}


def cmd_text(args: argparse.Namespace, redactor: Redactor) -> None:
    """Redact plain text on stdin."""
    if args.info:
        result = redactor.redact_reader_with_info(sys.stdin.buffer)
        json.dump(_result_to_dict(result), sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        sys.stdout.write(redactor.redact_reader(sys.stdin.buffer))


def cmd_json(args: argparse.Namespace, redactor: Redactor) -> None:
    """Redact a JSON document on stdin."""
    text = redactor.redact_reader(sys.stdin.buffer)
    # Pattern rules already ran above; only the key/path walk is left
    sys.stdout.write(redactor.json.redact_str(text))
    sys.stdout.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redact-engine",
        description="Redact sensitive text and JSON values",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--placeholder", default=None, help="Replacement text")
    parser.add_argument("--pattern", action="append", default=[], help="Regex to redact (repeatable)")
    parser.add_argument("--group", type=int, default=0, help="Capture group for --pattern")
    parser.add_argument("--value", action="append", default=[], help="Literal value to redact (repeatable)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)
    text = sub.add_parser("text", help="Redact plain text (stdin)")
    text.add_argument("--info", action="store_true", help="Print captures and positions as JSON")
    js = sub.add_parser("json", help="Redact a JSON document (stdin)")
    js.add_argument("--key", action="append", default=[], help="JSON key to redact (repeatable)")
    js.add_argument("--path", action="append", default=[], help="JSON dotted path, 'a.*' for a subtree (repeatable)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "text": cmd_text,
        "json": cmd_json,
    }
    try:
        config = _build_config(args)
        if args.command == "json":
            for key in args.key:
                config.add_key(key)
            for path in args.path:
                config.add_path(path)
        cmds[args.command](args, config.build())
    except RedactionError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
