"""Data models and type aliases for ``ledger_ingest``.

Two families live here:

- Result values (``Detected``, ``NeedsManualMapping``, ``Failed``) produced by
  a single parse call. They are frozen dataclasses; the union
  :data:`ParseOutcome` is exhaustive and callers are expected to ``match`` on
  it rather than probe attributes.
- Caller-supplied inputs (``ParseOptions``, ``ManualMapping``) which arrive
  from outside the core (CLI flags, a manual-mapping screen) and are therefore
  validated with pydantic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ctv import CanonicalTransaction

# ---------------------------------------------------------------------------
# Raw rows
# ---------------------------------------------------------------------------

RawRow: TypeAlias = Mapping[str, str]
"""One tokenized data row: column header -> cell text.

Keys are unique per row and come from the file's header line. Cells are
always strings (empty string for a missing cell), never ``None``.
"""


# ---------------------------------------------------------------------------
# Parse outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Detected:
    """A mapper was resolved (automatically or manually) and every row was tried.

    ``skipped_row_count`` counts rows that produced no record, whether they
    were filtered by a format rule, failed validation, or raised. Only the
    last kind also appears in ``errors``.
    """

    profile_id: str
    profile_name: str
    records: tuple[CanonicalTransaction, ...]
    total_row_count: int
    skipped_row_count: int
    errors: tuple[str, ...] = ()
    kind: Literal["detected"] = "detected"

    @property
    def imported_row_count(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "profile_id": self.profile_id,
            "profile_name": self.profile_name,
            "total_row_count": self.total_row_count,
            "imported_row_count": self.imported_row_count,
            "skipped_row_count": self.skipped_row_count,
            "errors": list(self.errors),
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True, slots=True)
class NeedsManualMapping:
    """No registered mapper recognized the header row.

    Carries the raw headers and a short, read-only preview so a person can
    assign columns to fields outside this package.
    """

    headers: tuple[str, ...]
    sample_rows: tuple[RawRow, ...]
    total_row_count: int
    kind: Literal["needs_manual_mapping"] = "needs_manual_mapping"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "headers": list(self.headers),
            "sample_rows": [dict(r) for r in self.sample_rows],
            "total_row_count": self.total_row_count,
        }


@dataclass(frozen=True, slots=True)
class Failed:
    """File-level failure: no partial results are returned."""

    errors: tuple[str, ...]
    kind: Literal["failed"] = "failed"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "errors": list(self.errors)}


ParseOutcome: TypeAlias = Detected | NeedsManualMapping | Failed


# ---------------------------------------------------------------------------
# Caller-supplied configuration
# ---------------------------------------------------------------------------


class ParseOptions(BaseModel):
    """Per-call knobs for tokenizing and previewing a file.

    ``encoding`` is a decode hint for byte input; when ``None`` the tokenizer
    tries UTF-8 (BOM tolerant) and then CP932, the Windows superset of
    Shift_JIS used by legacy accounting exports.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    encoding: str | None = None
    sample_size: int = Field(default=5, ge=0)
    skip_rows: int = Field(default=0, ge=0)


class ManualMapping(BaseModel):
    """Explicit field -> column assignment supplied by a person.

    Required fields are ``date``, ``amount`` and ``counterparty``; ``memo``
    and ``category`` are optional. Values are header names exactly as they
    appear in the file (surrounding whitespace is ignored).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    date: str
    amount: str
    counterparty: str
    memo: str | None = None
    category: str | None = None

    @field_validator("date", "amount", "counterparty")
    @classmethod
    def _required_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("column name must be non-empty")
        return v

    @field_validator("memo", "category")
    @classmethod
    def _optional_blank_to_none(cls, v: str | None) -> str | None:
        return v or None

    def columns(self) -> dict[str, str]:
        """Return the assigned columns keyed by logical field, unset ones omitted."""

        return {k: v for k, v in self.model_dump().items() if v is not None}


__all__ = [
    "RawRow",
    "Detected",
    "NeedsManualMapping",
    "Failed",
    "ParseOutcome",
    "ParseOptions",
    "ManualMapping",
]
