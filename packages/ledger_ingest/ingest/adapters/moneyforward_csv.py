"""Adapter for Money Forward (マネーフォワード) statement exports.

Observed header layouts::

    日付,内容,金額（円）,保有金融機関,大項目,中項目,メモ,振替,ID
    計算対象,日付,内容,金額（円）,保有金融機関,大項目,中項目,メモ,振替,ID

Money Forward flags non-economic rows with stringly-typed booleans:

- ``振替`` = ``1``/``true`` marks an internal transfer between the user's own
  accounts;
- ``計算対象`` = ``0``/``false`` marks a row the user excluded from totals.

Both kinds are dropped before any normalization runs, so a malformed cell on
such a row never surfaces as an error. Spending is exported as a negative
amount; the magnitude is kept.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...ctv import CanonicalTransaction
from ...models import RawRow
from ..mapping import Mapper, map_by_aliases
from ..profiles import FormatProfile, header_set

PROFILE = FormatProfile(
    id="moneyforward",
    name="Money Forward",
    name_ja="マネーフォワード",
    required_headers=("日付", "内容", "金額（円）", "大項目"),
    date=("日付",),
    amount=("金額（円）", "金額"),
    counterparty=("内容",),
    memo=("メモ",),
    category=("大項目", "中項目"),
    encoding="utf-8",
    min_header_matches=3,
)

TRANSFER_COLUMN = "振替"
INCLUDED_COLUMN = "計算対象"

_TRUE_VALUES = frozenset({"1", "true"})
_FALSE_VALUES = frozenset({"0", "false"})

# Distinctive enough on their own to claim the file.
_SIGNATURE_HEADERS = ("金額（円）", "大項目")


def detect(headers: Sequence[str]) -> bool:
    present = header_set(headers)
    if all(h in present for h in _SIGNATURE_HEADERS):
        return True
    return PROFILE.matches_headers(headers)


def _flag(row: RawRow, column: str) -> str:
    return (row.get(column) or "").strip().lower()


def is_excluded(row: RawRow) -> bool:
    """True for internal transfers and rows excluded from calculation."""

    return _flag(row, TRANSFER_COLUMN) in _TRUE_VALUES or _flag(row, INCLUDED_COLUMN) in _FALSE_VALUES


def to_ctv(row: RawRow) -> CanonicalTransaction | None:
    if is_excluded(row):
        return None
    return map_by_aliases(PROFILE, row)


MAPPER = Mapper(
    profile=PROFILE,
    detect=detect,
    map=to_ctv,
    detection_rule=" + ".join(_SIGNATURE_HEADERS) + ", or " + PROFILE.describe_required_headers(),
)

__all__ = ["MAPPER", "PROFILE", "detect", "is_excluded", "to_ctv"]
