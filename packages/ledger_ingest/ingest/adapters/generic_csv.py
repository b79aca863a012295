"""Catch-all adapter for Japanese ledgers with common column names.

Registered last. Detection only asks for *some* date column and *some* amount
column, so anything more specific must be registered ahead of it. Columns are
resolved per row from what the row actually carries; when no counterparty
column exists, the first non-empty cell that is neither the date nor the
amount stands in for it.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...ctv import CanonicalTransaction
from ...models import RawRow
from ..mapping import Mapper, build_transaction, find_column
from ..profiles import FormatProfile

PROFILE = FormatProfile(
    id="custom",
    name="Generic Japanese",
    name_ja="汎用日本語CSV",
    required_headers=("日付", "金額"),
    date=("日付", "取引日", "年月日", "発生日", "決済日"),
    amount=("金額", "支出金額", "支払金額", "出金", "入金額", "出金額"),
    counterparty=("摘要", "取引先", "相手先", "名称", "店舗名", "支払先"),
    memo=("メモ", "備考", "内容", "詳細", "コメント"),
    encoding="utf-8",
    min_header_matches=1,
)


def detect(headers: Sequence[str]) -> bool:
    return find_column(headers, PROFILE.date) is not None and (
        find_column(headers, PROFILE.amount) is not None
    )


def _fallback_counterparty(row: RawRow, *, skip: set[str]) -> str:
    for column, value in row.items():
        if column in skip:
            continue
        if value and value.strip():
            return value
    return ""


def to_ctv(row: RawRow) -> CanonicalTransaction | None:
    headers = list(row)
    date_col = find_column(headers, PROFILE.date)
    amount_col = find_column(headers, PROFILE.amount)
    if date_col is None or amount_col is None:
        return None

    counterparty_col = find_column(headers, PROFILE.counterparty)
    memo_col = find_column(headers, PROFILE.memo)
    if counterparty_col is not None:
        counterparty = row.get(counterparty_col, "")
    else:
        counterparty = _fallback_counterparty(row, skip={date_col, amount_col})

    return build_transaction(
        row,
        date_raw=row.get(date_col),
        amount_raw=row.get(amount_col),
        counterparty=counterparty,
        memo=row.get(memo_col) if memo_col is not None else None,
        allow_trailing_minus=PROFILE.trailing_minus,
    )


MAPPER = Mapper(
    profile=PROFILE,
    detect=detect,
    map=to_ctv,
    detection_rule="one date column and one amount column from the aliases",
)

__all__ = ["MAPPER", "PROFILE", "detect", "to_ctv"]
