# ruff: noqa: E501
"""Row-level snapshots for each registered export format.

Rows are tokenized with the real tokenizer and pushed through the adapter's
``to_ctv`` so header spellings, alias order and format rules are exercised
together.
"""

import textwrap

import pytest

from ledger_ingest import CanonicalTransaction
from ledger_ingest.ingest.adapters import freee_csv, generic_csv, moneyforward_csv, yayoi_csv
from ledger_ingest.ingest.tokenize import tokenize


def _dedent(s: str) -> str:
    # Keep internal newlines, but normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n")


def _rows(csv_text: str) -> list[dict[str, str]]:
    return [r.cells for r in tokenize(_dedent(csv_text)).rows]


def test_freee_snapshot_to_ctv():
    rows = _rows(
        """
        取引日,決済口座,決済日,取引先,勘定科目,税区分,金額,備考
        2024/03/01,現金,2024/03/01,Amazon,消耗品費,課対仕入10%,"1,500",USBケーブル
        2024-03-04,普通預金,2024-03-25,東京電力,水道光熱費,課対仕入10%,"¥8,230",
        """
    )

    got = [freee_csv.to_ctv(r) for r in rows]

    assert got == [
        CanonicalTransaction(
            date="2024-03-01",
            amount=1500,
            counterparty="Amazon",
            memo="USBケーブル",
            source_category="消耗品費",
            original_row=rows[0],
        ),
        CanonicalTransaction(
            date="2024-03-04",
            amount=8230,
            counterparty="東京電力",
            memo=None,
            source_category="水道光熱費",
            original_row=rows[1],
        ),
    ]


def test_freee_detailed_layout_uses_secondary_aliases():
    rows = _rows(
        """
        発生日,取引先名,借方勘定科目,補助科目,税区分,借方金額,決済口座,決済日,摘要
        2024/04/10,JR東日本,旅費交通費,,課対仕入10%,"▲1,320",現金,2024/04/10,出張
        """
    )

    (got,) = [freee_csv.to_ctv(r) for r in rows]

    assert got == CanonicalTransaction(
        date="2024-04-10",
        amount=1320,
        counterparty="JR東日本",
        memo="出張",
        source_category="旅費交通費",
        original_row=rows[0],
    )


def test_freee_row_without_counterparty_is_declined():
    rows = _rows(
        """
        取引日,取引先,勘定科目,金額
        2024-03-01,,消耗品費,"1,500"
        """
    )
    assert freee_csv.to_ctv(rows[0]) is None


def test_moneyforward_snapshot_to_ctv():
    rows = _rows(
        """
        計算対象,日付,内容,金額（円）,保有金融機関,大項目,中項目,メモ,振替,ID
        1,2024/03/01,セブン-イレブン,-540,楽天カード,食費,コンビニ,お茶,0,mf1
        1,2024/03/02,口座振替 楽天カード,-30000,三井住友銀行,未分類,未分類,,1,mf2
        0,2024/03/03,立替分,-2000,現金,交際費,飲み会,,0,mf3
        1,2024/03/25,給与,250000,三井住友銀行,収入,給与,,0,mf4
        """
    )

    got = [moneyforward_csv.to_ctv(r) for r in rows]

    assert got == [
        CanonicalTransaction(
            date="2024-03-01",
            amount=540,
            counterparty="セブン-イレブン",
            memo="お茶",
            source_category="食費",
            original_row=rows[0],
        ),
        None,  # internal transfer
        None,  # excluded from calculation
        CanonicalTransaction(
            date="2024-03-25",
            amount=250000,
            counterparty="給与",
            memo=None,
            source_category="収入",
            original_row=rows[3],
        ),
    ]


@pytest.mark.parametrize(
    ("transfer", "included", "excluded"),
    [
        ("1", "", True),
        ("true", "", True),
        ("TRUE", "", True),
        ("", "0", True),
        ("", "false", True),
        ("0", "1", False),
        ("", "", False),
    ],
)
def test_moneyforward_exclusion_flags(transfer, included, excluded):
    row = {"日付": "2024/03/01", "内容": "x", "金額（円）": "-1", "振替": transfer, "計算対象": included}
    assert moneyforward_csv.is_excluded(row) is excluded


def test_moneyforward_excluded_row_is_dropped_before_normalization():
    # The amount cell is garbage, but the transfer flag wins: no exception.
    row = {"日付": "2024/03/01", "内容": "振替", "金額（円）": "12abc", "振替": "1"}
    assert moneyforward_csv.to_ctv(row) is None


def test_yayoi_snapshot_to_ctv():
    rows = _rows(
        """
        伝票No,取引日付,借方勘定科目,借方補助科目,借方金額,貸方勘定科目,貸方補助科目,貸方金額,摘要
        1,R6/01/15,新聞図書費,,"2,200",普通預金,,"2,200",Amazon.co.jp ビジネス書籍
        2,H31/04/30,支払手数料,,▲330,普通預金,,330,ABC株式会社 振込手数料
        3,R6/02/01,雑費,,500,現金,,500,
        """
    )

    got = [yayoi_csv.to_ctv(r) for r in rows]

    assert got == [
        CanonicalTransaction(
            date="2024-01-15",
            amount=2200,
            counterparty="Amazon.co.jp",
            memo="Amazon.co.jp ビジネス書籍",
            source_category="新聞図書費",
            original_row=rows[0],
        ),
        CanonicalTransaction(
            date="2019-04-30",
            amount=330,
            counterparty="ABC株式会社",
            memo="ABC株式会社 振込手数料",
            source_category="支払手数料",
            original_row=rows[1],
        ),
        CanonicalTransaction(
            date="2024-02-01",
            amount=500,
            counterparty="不明",
            memo=None,
            source_category="雑費",
            original_row=rows[2],
        ),
    ]


def test_yayoi_uses_partner_column_when_description_is_empty():
    row = {"日付": "2024/05/01", "勘定科目": "外注費", "金額": "55,000", "摘要": "", "取引先": "山田デザイン"}
    got = yayoi_csv.to_ctv(row)
    assert got is not None
    assert got.counterparty == "山田デザイン"
    assert got.memo is None
    assert got.amount == 55000


def test_yayoi_description_is_cut_at_first_space():
    row = {"日付": "2024/05/01", "勘定科目": "外注費", "金額": "55,000", "摘要": "5月分 デザイン", "取引先": ""}
    got = yayoi_csv.to_ctv(row)
    assert got is not None
    assert got.counterparty == "5月分"
    assert got.memo == "5月分 デザイン"


def test_generic_snapshot_to_ctv():
    rows = _rows(
        """
        日付,金額,店舗名,備考
        2024年3月5日,"￥３，４００",ローソン,昼食
        2024/03/06,0,ファミリーマート,
        2024/03/07,"1,080",,雑誌
        """
    )

    got = [generic_csv.to_ctv(r) for r in rows]

    assert got == [
        CanonicalTransaction(
            date="2024-03-05",
            amount=3400,
            counterparty="ローソン",
            memo="昼食",
            source_category=None,
            original_row=rows[0],
        ),
        None,  # zero amount
        None,  # empty counterparty column
    ]


def test_generic_without_counterparty_column_uses_first_other_cell():
    rows = _rows(
        """
        決済日,出金額,区分,コメント
        2024-03-05,980,書籍,技術書
        """
    )

    (got,) = [generic_csv.to_ctv(r) for r in rows]

    assert got is not None
    assert got.counterparty == "書籍"
    assert got.memo == "技術書"
    assert got.amount == 980
