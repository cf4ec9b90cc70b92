"""Logging integration: run every log message through a Redactor.

Usage:
    redactor = RedactorConfig().add_value(api_token).build()
    install(redactor)                  # root logger's handlers
    logging.info("calling with %s", api_token)
    # -> "calling with [TEXT_REDACTED]"
"""

from __future__ import annotations
import logging

from .redactor import Redactor

__all__ = ["RedactingFilter", "install"]


class RedactingFilter(logging.Filter):
    """Rewrite each record's message through a Redactor.  Never drops records."""

    def __init__(self, redactor: Redactor) -> None:
        super().__init__()
        self.redactor = redactor

    def filter(self, record: logging.LogRecord) -> bool:
        # Format once so secrets passed as %-args are covered too
        try:
            message = record.getMessage()
        except Exception:
            # Never crash logging; the handler reports the bad format call itself
            return True
        record.msg = self.redactor.redact(message)
        record.args = None
        return True


def install(redactor: Redactor, logger: logging.Logger | None = None) -> RedactingFilter:
    """Attach a RedactingFilter to every handler of ``logger`` (root by default).

    A logger without handlers gets the filter on itself; that only covers
    records logged directly on it, not ones propagated from children.
    """
    target = logger or logging.getLogger()
    flt = RedactingFilter(redactor)
    for handler in target.handlers:
        handler.addFilter(flt)
    if not target.handlers:
        target.addFilter(flt)
    return flt
