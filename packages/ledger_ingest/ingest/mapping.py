"""Row-mapping building blocks shared by every format adapter.

A :class:`Mapper` is a plain value pairing a :class:`FormatProfile` with two
callables, ``detect(headers)`` and ``map(row)``. Adapters build one at import
time; the registry keeps them in a fixed order. There is no base class to
inherit from: formats with quirks simply pass different callables.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from ..ctv import CanonicalTransaction
from ..models import RawRow
from ..normalizers import (
    clean_text,
    normalize_amount,
    normalize_date,
    strip_or_none,
    validate_iso_date,
)
from .profiles import ColumnAlias, FormatProfile, header_set

DetectFn: TypeAlias = Callable[[Sequence[str]], bool]
MapFn: TypeAlias = Callable[[RawRow], CanonicalTransaction | None]


@dataclass(frozen=True, slots=True)
class Mapper:
    """A format strategy: recognize a header row, translate one data row.

    ``map`` returns ``None`` for rows that should not be imported (filtered by
    a format rule or missing a required field) and raises ``ValueError`` for
    cells that cannot be normalized.
    """

    profile: FormatProfile
    detect: DetectFn
    map: MapFn
    detection_rule: str = ""

    @property
    def id(self) -> str:
        return self.profile.id

    def describe_detection(self) -> str:
        """Human-readable form of what ``detect`` checks.

        Mappers built with :func:`threshold_detector` are described from the
        profile; mappers with their own ``detect`` carry ``detection_rule``.
        """

        return self.detection_rule or self.profile.describe_required_headers()


# ---------------------------------------------------------------------------
# Alias resolution
# ---------------------------------------------------------------------------


def resolve_field(row: RawRow, aliases: ColumnAlias) -> str:
    """Return the first non-blank cell among ``aliases``, or ``""``."""

    for name in aliases:
        value = row.get(name)
        if value is not None and value.strip() != "":
            return value
    return ""


def find_column(headers: Iterable[str], aliases: ColumnAlias) -> str | None:
    """Return the first alias present in ``headers``."""

    present = header_set(headers)
    for name in aliases:
        if name in present:
            return name
    return None


def count_present(headers: Iterable[str], names: Iterable[str]) -> int:
    present = header_set(headers)
    return sum(1 for n in names if n in present)


def threshold_detector(profile: FormatProfile) -> DetectFn:
    """Detector accepting headers with enough of the profile's required headers."""

    def detect(headers: Sequence[str]) -> bool:
        return profile.matches_headers(headers)

    return detect


# ---------------------------------------------------------------------------
# Record assembly
# ---------------------------------------------------------------------------


def build_transaction(
    row: RawRow,
    *,
    date_raw: str | None,
    amount_raw: str | None,
    counterparty: str | None,
    memo: str | None = None,
    category: str | None = None,
    allow_trailing_minus: bool = True,
) -> CanonicalTransaction | None:
    """Normalize raw field values and assemble a record.

    Returns ``None`` when the date is not a ``YYYY-MM-DD`` shape, the amount
    is zero/absent or the counterparty is empty. The amount is stored as an
    unsigned magnitude.
    """

    iso_date = validate_iso_date(normalize_date(date_raw))
    amount = normalize_amount(amount_raw, allow_trailing_minus=allow_trailing_minus)
    name = clean_text(counterparty)
    if iso_date is None or amount == 0 or not name:
        return None
    return CanonicalTransaction(
        date=iso_date,
        amount=abs(amount),
        counterparty=name,
        memo=strip_or_none(memo),
        source_category=strip_or_none(category),
        original_row=row,
    )


def map_by_aliases(profile: FormatProfile, row: RawRow) -> CanonicalTransaction | None:
    """Straight alias lookup for every field, no format-specific rules."""

    return build_transaction(
        row,
        date_raw=resolve_field(row, profile.date),
        amount_raw=resolve_field(row, profile.amount),
        counterparty=resolve_field(row, profile.counterparty),
        memo=resolve_field(row, profile.memo),
        category=resolve_field(row, profile.category),
        allow_trailing_minus=profile.trailing_minus,
    )


__all__ = [
    "DetectFn",
    "MapFn",
    "Mapper",
    "build_transaction",
    "count_present",
    "find_column",
    "map_by_aliases",
    "resolve_field",
    "threshold_detector",
]
