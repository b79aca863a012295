import pytest

from ledger_ingest.ingest.adapters import freee_csv, generic_csv, moneyforward_csv, yayoi_csv
from ledger_ingest.ingest.profiles import FormatProfile
from ledger_ingest.ingest.registry import ALL_MAPPERS, detect_mapper, get_mapper_by_id


def test_registration_order_is_most_specific_first():
    assert [m.id for m in ALL_MAPPERS] == ["freee", "moneyforward", "yayoi", "custom"]


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        (["取引日", "決済口座", "決済日", "取引先", "勘定科目", "税区分", "金額", "備考"], "freee"),
        # three of the four freee headers are enough
        (["取引日", "取引先", "金額"], "freee"),
        (["日付", "内容", "金額（円）", "保有金融機関", "大項目", "中項目", "メモ", "振替", "ID"], "moneyforward"),
        # signature pair alone claims the file
        (["金額（円）", "大項目"], "moneyforward"),
        (
            ["伝票No", "取引日付", "借方勘定科目", "借方補助科目", "借方金額", "貸方勘定科目", "貸方補助科目", "貸方金額", "摘要"],
            "yayoi",
        ),
        (["日付", "金額", "摘要"], "custom"),
        (["年月日", "出金額", "店舗名"], "custom"),
    ],
)
def test_detect_mapper_known_layouts(headers, expected):
    mapper = detect_mapper(headers)
    assert mapper is not None
    assert mapper.id == expected


@pytest.mark.parametrize(
    "headers",
    [
        ["Col1", "Col2"],
        ["日付", "内容"],  # a date but no amount
        ["金額", "メモ"],  # an amount but no date
        [],
    ],
)
def test_detect_mapper_returns_none_for_unknown_headers(headers):
    assert detect_mapper(headers) is None


def test_moneyforward_wins_over_generic_when_both_match():
    headers = ["日付", "内容", "金額", "大項目", "中項目"]
    assert moneyforward_csv.detect(headers)
    assert generic_csv.detect(headers)
    assert detect_mapper(headers).id == "moneyforward"


def test_freee_wins_over_yayoi_when_both_match():
    headers = ["取引日", "取引先", "勘定科目", "借方勘定科目", "借方金額"]
    assert freee_csv.MAPPER.detect(headers)
    assert yayoi_csv.detect(headers)
    assert detect_mapper(headers).id == "freee"


def test_yayoi_wins_over_generic_when_both_match():
    headers = ["日付", "借方金額", "貸方金額", "金額", "摘要"]
    assert generic_csv.detect(headers)
    assert detect_mapper(headers).id == "yayoi"


def test_custom_order_changes_the_winner():
    headers = ["日付", "内容", "金額", "大項目"]
    mappers = (generic_csv.MAPPER, moneyforward_csv.MAPPER)
    assert detect_mapper(headers, mappers).id == "custom"


def test_detection_is_deterministic():
    headers = ["日付", "内容", "金額", "大項目", "中項目"]
    assert {detect_mapper(headers).id for _ in range(20)} == {"moneyforward"}


def test_get_mapper_by_id():
    assert get_mapper_by_id("yayoi") is yayoi_csv.MAPPER
    assert get_mapper_by_id("custom") is generic_csv.MAPPER
    assert get_mapper_by_id("missing") is None


def test_profile_defaults_to_requiring_every_header():
    profile = FormatProfile(
        id="bank",
        name="Bank",
        name_ja="銀行",
        required_headers=("日付", "金額"),
        date=("日付",),
        amount=("金額",),
        counterparty=("摘要",),
    )
    assert profile.min_header_matches == 2
    assert profile.matches_headers(["日付", "金額"])
    assert not profile.matches_headers(["日付"])


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"required_headers": ("日付", "残高")}, "not covered by aliases: 残高"),
        ({"date": ()}, "date needs at least one alias"),
        ({"min_header_matches": 3}, "min_header_matches exceeds"),
    ],
)
def test_profile_rejects_inconsistent_definitions(overrides, message):
    kwargs = {
        "id": "bank",
        "name": "Bank",
        "name_ja": "銀行",
        "required_headers": ("日付", "金額"),
        "date": ("日付",),
        "amount": ("金額",),
        "counterparty": ("摘要",),
    }
    kwargs.update(overrides)
    with pytest.raises(ValueError, match=message):
        FormatProfile(**kwargs)


def test_detection_description_matches_what_detect_checks():
    assert freee_csv.MAPPER.describe_detection() == "3 of: 取引日, 取引先, 勘定科目, 金額"
    assert moneyforward_csv.MAPPER.describe_detection() == (
        "金額（円） + 大項目, or 3 of: 日付, 内容, 金額（円）, 大項目"
    )
    assert yayoi_csv.MAPPER.describe_detection() == (
        "2 of: 借方勘定科目, 借方金額, 貸方勘定科目, 貸方金額, 伝票No"
    )
    assert "date" in generic_csv.MAPPER.describe_detection()
    # The Yayoi rule does not need the profile's headers: a journal with only
    # the credit-side columns is still recognized.
    assert yayoi_csv.detect(["貸方勘定科目", "貸方金額"])
    assert not yayoi_csv.PROFILE.matches_headers(["貸方勘定科目", "貸方金額"])
