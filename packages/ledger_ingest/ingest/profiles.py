"""Declarative descriptions of known ledger export formats.

A :class:`FormatProfile` says what a format looks like (the headers used to
recognize it) and where each logical field lives (an ordered alias list per
field). It holds no behavior beyond small header-matching helpers; the row
translation lives in the adapter module that owns the profile.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TypeAlias

ColumnAlias: TypeAlias = tuple[str, ...]
"""Acceptable header names for one logical field, in preference order."""

LOGICAL_FIELDS: tuple[str, ...] = ("date", "amount", "counterparty", "memo", "category")
REQUIRED_FIELDS: tuple[str, ...] = ("date", "amount", "counterparty")


def header_set(headers: Iterable[str]) -> frozenset[str]:
    return frozenset(h.strip() for h in headers)


@dataclass(frozen=True, slots=True)
class FormatProfile:
    """Identity, detection headers and column aliases of one export format.

    ``required_headers`` must be drawn from the alias lists. They drive
    :meth:`matches_headers` (at least ``min_header_matches`` hits, all of them
    by default), which is what :func:`~ledger_ingest.ingest.mapping.threshold_detector`
    and manual mappings detect with. Adapters with their own ``detect`` may
    ignore them and describe their rule on the mapper instead. ``encoding``
    is a decode hint only.
    """

    id: str
    name: str
    name_ja: str
    required_headers: tuple[str, ...]
    date: ColumnAlias
    amount: ColumnAlias
    counterparty: ColumnAlias
    memo: ColumnAlias = ()
    category: ColumnAlias = ()
    encoding: str = "utf-8"
    min_header_matches: int = 0
    trailing_minus: bool = True

    def __post_init__(self) -> None:
        for name in REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ValueError(f"profile {self.id!r}: {name} needs at least one alias")
        known = {alias for aliases in self.aliases().values() for alias in aliases}
        stray = [h for h in self.required_headers if h not in known]
        if stray:
            raise ValueError(
                f"profile {self.id!r}: required headers not covered by aliases: {', '.join(stray)}"
            )
        if self.min_header_matches <= 0:
            object.__setattr__(self, "min_header_matches", len(self.required_headers))
        if self.min_header_matches > len(self.required_headers):
            raise ValueError(f"profile {self.id!r}: min_header_matches exceeds required headers")

    def aliases(self) -> Mapping[str, ColumnAlias]:
        """Alias lists keyed by logical field, in :data:`LOGICAL_FIELDS` order."""

        return {name: getattr(self, name) for name in LOGICAL_FIELDS}

    def count_header_matches(self, headers: Iterable[str]) -> int:
        present = header_set(headers)
        return sum(1 for h in self.required_headers if h in present)

    def matches_headers(self, headers: Iterable[str]) -> bool:
        return self.count_header_matches(headers) >= self.min_header_matches

    def describe_required_headers(self) -> str:
        if self.min_header_matches == len(self.required_headers):
            return "all of: " + ", ".join(self.required_headers)
        return f"{self.min_header_matches} of: " + ", ".join(self.required_headers)


__all__ = [
    "ColumnAlias",
    "FormatProfile",
    "LOGICAL_FIELDS",
    "REQUIRED_FIELDS",
    "header_set",
]
