"""Canonical Transaction View (CTV) record.

Every export format, whatever its column names, date and sign conventions,
converges to this one record shape before it leaves the ingest core.

Field order (exact):
    - date: string (``YYYY-MM-DD``, validated as a real calendar date)
    - amount: integer, always > 0 (unsigned magnitude in the source's
      currency unit; direction is decided downstream)
    - counterparty: string, never empty
    - memo: string | None
    - source_category: string | None (verbatim label from the source file)
    - original_row: read-only mapping of the raw cells the record came from
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A single canonicalized transaction row.

    ``date`` is kept as a normalized string rather than a :class:`datetime.date`
    to preserve exact output formatting guarantees, matching the CSV/JSON
    friendly shape consumers already read.
    """

    date: str
    amount: int
    counterparty: str
    memo: str | None = None
    source_category: str | None = None
    original_row: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount!r}")
        if not self.counterparty:
            raise ValueError("counterparty must be non-empty")
        # Freeze the raw row so the record is immutable end to end.
        if not isinstance(self.original_row, MappingProxyType):
            object.__setattr__(self, "original_row", MappingProxyType(dict(self.original_row)))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly ``dict`` in field order."""

        return {
            "date": self.date,
            "amount": self.amount,
            "counterparty": self.counterparty,
            "memo": self.memo,
            "source_category": self.source_category,
            "original_row": dict(self.original_row),
        }


__all__ = ["CanonicalTransaction"]
