"""Tests for the logging integration."""

import io
import logging

import pytest

from redact_engine import REDACT_PLACEHOLDER, RedactingFilter, RedactorConfig
from redact_engine.logfilter import install

R = REDACT_PLACEHOLDER


@pytest.fixture
def log_setup():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger = logging.getLogger("redact_engine.tests.logfilter")
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.INFO)
    yield logger, handler, stream
    logger.handlers = []


def test_filter_redacts_message(log_setup):
    logger, handler, stream = log_setup
    handler.addFilter(RedactingFilter(RedactorConfig().add_pattern("(bar)", 1).build()))

    logger.info("log message ")
    logger.info("message that include bar")

    assert stream.getvalue().splitlines() == [
        "INFO log message ",
        f"INFO message that include {R}",
    ]


def test_filter_redacts_format_args(log_setup):
    logger, handler, stream = log_setup
    handler.addFilter(RedactingFilter(RedactorConfig().add_value("s3cr3t").build()))

    logger.warning("token=%s user=%s", "s3cr3t", "bob")

    assert stream.getvalue().strip() == f"WARNING token={R} user=bob"


def test_filter_survives_bad_format_args(log_setup, monkeypatch):
    logger, handler, stream = log_setup
    handler.addFilter(RedactingFilter(RedactorConfig().add_value("one").build()))
    errors = []
    monkeypatch.setattr(handler, "handleError", errors.append)

    logger.error("a %s %s", "one")

    assert len(errors) == 1
    assert stream.getvalue() == ""


def test_install_attaches_to_handlers(log_setup):
    logger, handler, stream = log_setup
    flt = install(RedactorConfig().add_value("hunter2").build(), logger)

    assert flt in handler.filters
    logger.info("password is hunter2")
    assert stream.getvalue().strip() == f"INFO password is {R}"


def test_install_on_logger_without_handlers():
    logger = logging.getLogger("redact_engine.tests.logfilter.bare")
    logger.handlers = []
    flt = install(RedactorConfig().add_value("x").build(), logger)
    try:
        assert flt in logger.filters
    finally:
        logger.removeFilter(flt)
