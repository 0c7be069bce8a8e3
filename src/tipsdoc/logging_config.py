"""Logging setup for tipsdoc.

Log records go to stderr so stdout stays reserved for reports. Context is
attached with ``extra={...}`` and rendered after the message.
"""

from __future__ import annotations

import logging
import sys

_ROOT_LOGGER = "tipsdoc"
_STANDARD_ATTRS = set(vars(logging.makeLogRecord({})))
_STANDARD_ATTRS.update({"message", "asctime"})


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS
        }
        if not extras:
            return base
        fields = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} {fields}"


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Install a single stderr handler on the package logger."""
    logger = logging.getLogger(_ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_tipsdoc", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ExtraFormatter("%(levelname)s %(name)s: %(message)s"))
    handler._tipsdoc = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``tipsdoc`` namespace."""
    if name != _ROOT_LOGGER and not name.startswith(_ROOT_LOGGER + "."):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
