"""Adapter for freee (freee会計) transaction exports.

Observed header layouts::

    取引日,決済口座,決済日,取引先,勘定科目,税区分,金額,備考
    取引日,取引先,勘定科目,補助科目,税区分,金額,決済口座,決済日,備考

Detection needs at least three of ``取引日, 取引先, 勘定科目, 金額``; rows are
mapped by straight alias lookup. Expenses are exported as positive amounts,
but the magnitude is taken either way.
"""

from __future__ import annotations

from ...ctv import CanonicalTransaction
from ...models import RawRow
from ..mapping import Mapper, map_by_aliases, threshold_detector
from ..profiles import FormatProfile

PROFILE = FormatProfile(
    id="freee",
    name="freee",
    name_ja="freee会計",
    required_headers=("取引日", "取引先", "勘定科目", "金額"),
    date=("取引日", "発生日"),
    amount=("金額", "借方金額"),
    counterparty=("取引先", "取引先名"),
    memo=("備考", "摘要"),
    category=("勘定科目", "借方勘定科目"),
    encoding="utf-8",
    min_header_matches=3,
)


def to_ctv(row: RawRow) -> CanonicalTransaction | None:
    return map_by_aliases(PROFILE, row)


MAPPER = Mapper(profile=PROFILE, detect=threshold_detector(PROFILE), map=to_ctv)

__all__ = ["MAPPER", "PROFILE", "to_ctv"]
