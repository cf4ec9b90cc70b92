"""Tests for the command line interface."""

import io
import json
import sys

import pytest

from redact_engine import REDACT_PLACEHOLDER
from redact_engine.cli import main

R = REDACT_PLACEHOLDER


@pytest.fixture
def stdin(monkeypatch):
    def feed(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))
    return feed


def test_text_with_pattern(stdin, capsys):
    stdin(b"string to redact: foo,bar")
    assert main(["--pattern", "(bar)", "--group", "1", "text"]) == 0
    assert capsys.readouterr().out == f"string to redact: foo,{R}"


def test_text_with_values_and_placeholder(stdin, capsys):
    stdin(b"foo,bar,baz")
    assert main(["--placeholder", "***", "--value", "foo", "--value", "baz", "text"]) == 0
    assert capsys.readouterr().out == "***,bar,***"


def test_text_info(stdin, capsys):
    stdin(b"a\nb\nfoo")
    assert main(["--value", "foo", "text", "--info"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {
        "text": f"a\nb\n{R}",
        "captures": [
            {"text": "foo", "pattern": "(foo)", "line": 3, "start_offset": 4, "end_offset": 7},
        ],
    }


def test_json_keys_and_paths(stdin, capsys):
    stdin(b'{"auth": {"token": "x"}, "user": {"name": "bob", "email": "e"}, "arr": [1, 2]}')
    assert main(["json", "--key", "arr", "--path", "user.email", "--path", "auth.*"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"auth": R, "user": {"name": "bob", "email": R}, "arr": [R, R]}


def test_json_applies_values_first(stdin, capsys):
    stdin(b'{"note": "hunter2 here"}')
    assert main(["--value", "hunter2", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"note": f"{R} here"}


def test_config_file(tmp_path, stdin, capsys):
    path = tmp_path / "redact.yaml"
    path.write_text("patterns:\n  - test: '(bar)'\n    group: 1\nkeys: [k]\n", encoding="utf-8")
    stdin(b'{"k": 1, "v": "bar"}')
    assert main(["--config", str(path), "json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"k": R, "v": R}


def test_invalid_json_exits_nonzero(stdin, capsys):
    stdin(b"{not json")
    assert main(["json", "--key", "k"]) == 1
    assert capsys.readouterr().err.startswith("error: invalid JSON")


def test_invalid_utf8_exits_nonzero(stdin, capsys):
    stdin(b"\xff\xfe")
    assert main(["--value", "x", "text"]) == 1
    assert "UTF-8" in capsys.readouterr().err


def test_bad_pattern_exits_nonzero(stdin, capsys):
    stdin(b"anything")
    assert main(["--pattern", "(", "text"]) == 1
    assert "could not parse" in capsys.readouterr().err


def test_malformed_config_section_exits_nonzero(tmp_path, stdin, capsys):
    path = tmp_path / "redact.yaml"
    path.write_text("redact_engine: [a]\n", encoding="utf-8")
    stdin(b"anything")
    assert main(["--config", str(path), "text"]) == 1
    assert "redact_engine must be a mapping" in capsys.readouterr().err


def test_missing_config_exits_nonzero(tmp_path, stdin, capsys):
    stdin(b"anything")
    assert main(["--config", str(tmp_path / "missing.yaml"), "text"]) == 1
    assert capsys.readouterr().err.startswith("error:")
