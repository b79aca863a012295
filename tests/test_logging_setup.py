import io
import logging

import pytest

from ledger_ingest import logging_setup
from ledger_ingest.logging_setup import configure_logging, get_logger


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (logging.ERROR, logging.ERROR),
        ("debug", logging.DEBUG),
        (" Warning ", logging.WARNING),
        ("15", 15),
        ("chatty", logging.INFO),
    ],
)
def test_parse_level(level, expected):
    assert logging_setup._parse_level(level) == expected


def test_parse_level_falls_back_to_env(monkeypatch):
    assert logging_setup._parse_level(None) == logging.INFO
    monkeypatch.setenv(logging_setup.LEVEL_ENV_VAR, "ERROR")
    assert logging_setup._parse_level(None) == logging.ERROR


def test_unconfigured_package_logger_is_silent():
    get_logger("ledger_ingest.parse")
    handlers = logging.getLogger("ledger_ingest").handlers
    assert handlers
    assert all(isinstance(h, logging.NullHandler) for h in handlers)


def test_configure_logging_once():
    stream = io.StringIO()
    configure_logging("DEBUG", fmt="%(name)s:%(levelname)s:%(message)s", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())

    get_logger("ledger_ingest.parse").debug("tokenized %d rows", 3)

    pkg_logger = logging.getLogger("ledger_ingest")
    assert pkg_logger.level == logging.DEBUG
    assert len(pkg_logger.handlers) == 1
    assert not pkg_logger.propagate
    assert stream.getvalue() == "ledger_ingest.parse:DEBUG:tokenized 3 rows\n"


def test_reset_logging_allows_reconfiguring():
    first, second = io.StringIO(), io.StringIO()
    configure_logging("INFO", fmt="%(message)s", stream=first)
    logging_setup.reset_logging()
    configure_logging("INFO", fmt="%(message)s", stream=second)

    get_logger("ledger_ingest.registry").info("detected %s", "yayoi")

    assert first.getvalue() == ""
    assert second.getvalue() == "detected yayoi\n"
    assert len(logging.getLogger("ledger_ingest").handlers) == 1
