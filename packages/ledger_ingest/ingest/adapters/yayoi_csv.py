"""Adapter for Yayoi (弥生会計) journal exports.

Observed header layouts::

    伝票No,取引日付,借方勘定科目,借方補助科目,借方金額,貸方勘定科目,貸方補助科目,貸方金額,摘要
    日付,勘定科目,金額,摘要

Yayoi has no counterparty column of its own: the counterparty is written at
the start of ``摘要`` (description), e.g. ``"Amazon.co.jp ビジネス書籍"`` or
``"○○株式会社 請求書No.123"``. When the resolved counterparty is just the
description again (or nothing at all) it is cut out of the description with
:func:`~ledger_ingest.normalizers.derive_counterparty`, falling back to
``不明``. Exports are usually Shift_JIS.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...ctv import CanonicalTransaction
from ...models import RawRow
from ...normalizers import derive_counterparty
from ..mapping import Mapper, build_transaction, count_present, resolve_field
from ..profiles import FormatProfile

PROFILE = FormatProfile(
    id="yayoi",
    name="Yayoi",
    name_ja="弥生会計",
    required_headers=("取引日付", "借方勘定科目", "借方金額", "摘要"),
    date=("取引日付", "日付", "伝票日付"),
    amount=("借方金額", "金額"),
    counterparty=("摘要", "取引先"),
    memo=("摘要",),
    category=("借方勘定科目", "勘定科目"),
    encoding="shift_jis",
    min_header_matches=2,
)

# Double-entry columns only Yayoi journals carry.
SIGNATURE_HEADERS: tuple[str, ...] = ("借方勘定科目", "借方金額", "貸方勘定科目", "貸方金額", "伝票No")
MIN_SIGNATURE_MATCHES = 2


def detect(headers: Sequence[str]) -> bool:
    return count_present(headers, SIGNATURE_HEADERS) >= MIN_SIGNATURE_MATCHES


def to_ctv(row: RawRow) -> CanonicalTransaction | None:
    description = resolve_field(row, PROFILE.memo).strip()
    counterparty = resolve_field(row, PROFILE.counterparty).strip()
    if not counterparty or counterparty == description:
        counterparty = derive_counterparty(description)

    return build_transaction(
        row,
        date_raw=resolve_field(row, PROFILE.date),
        amount_raw=resolve_field(row, PROFILE.amount),
        counterparty=counterparty,
        memo=description,
        category=resolve_field(row, PROFILE.category),
        allow_trailing_minus=PROFILE.trailing_minus,
    )


MAPPER = Mapper(
    profile=PROFILE,
    detect=detect,
    map=to_ctv,
    detection_rule=f"{MIN_SIGNATURE_MATCHES} of: " + ", ".join(SIGNATURE_HEADERS),
)

__all__ = ["MAPPER", "PROFILE", "SIGNATURE_HEADERS", "detect", "to_ctv"]
