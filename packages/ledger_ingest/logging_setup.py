"""Logging for ``ledger_ingest``: silent as a library, one stderr handler in the CLI.

Parsing code logs through ``get_logger("ledger_ingest.<module>")`` and never
touches handlers. Row-level problems go out at WARNING, per-file summaries at
INFO and tokenizer/detector details at DEBUG, so ``--log-level WARNING`` on
the CLI leaves only what a person importing a ledger needs to look at.

The CLI (or any host application) calls :func:`configure_logging` once.
:func:`reset_logging` returns the package logger to its unconfigured state,
for hosts and tests that configure more than once per process.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledger_ingest"
LEVEL_ENV_VAR = "LEDGER_INGEST_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    """Resolve ``level`` to a number; ``None`` consults ``LEDGER_INGEST_LOG_LEVEL``.

    Unknown names fall back to INFO rather than failing a parse run over a
    typo in ``.env``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send package log records to ``stream``; later calls are no-ops.

    Parameters
    ----------
    level:
        ``int`` or level name; ``None`` reads ``LEDGER_INGEST_LOG_LEVEL`` and
        defaults to INFO.
    fmt:
        Format string, default :data:`DEFAULT_FORMAT`.
    stream:
        Destination of the single ``StreamHandler``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = _parse_level(level)
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in [h for h in pkg_logger.handlers if isinstance(h, logging.NullHandler)]:
        pkg_logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(resolved)
    # The host's root handlers would print every record a second time.
    pkg_logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop handlers added by :func:`configure_logging` and allow configuring again."""

    global _CONFIGURED
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg_logger.handlers):
        pkg_logger.removeHandler(h)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        # Keeps "no handlers could be found" noise out of library use.
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["DEFAULT_FORMAT", "LEVEL_ENV_VAR", "configure_logging", "get_logger", "reset_logging"]
