"""Pytest configuration for test isolation.

The CLI loads ``.env`` from the current working directory, reads
``LEDGER_INGEST_LOG_LEVEL`` and configures the package logger once per
process. To keep tests hermetic regardless of where or in which order they
run, every test starts from its own temporary directory with that variable
unset, and any logging configuration a test triggers is undone afterwards.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from ledger_ingest import logging_setup


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_setup.LEVEL_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logging_setup.reset_logging()


def _dedent(s: str) -> str:
    # Keep internal newlines, but normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n")


@pytest.fixture
def write_ledger(tmp_path: Path) -> Callable[..., Path]:
    """Write CSV text to a file under ``tmp_path`` in the given encoding."""

    def _write(text: str, *, name: str = "ledger.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(_dedent(text).encode(encoding))
        return path

    return _write
