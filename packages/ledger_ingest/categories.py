"""Static lookup from source-side category labels to application categories.

Accounting tools label expenses with their own account names (勘定科目 in
freee and Yayoi, 大項目 in Money Forward). Records keep that label verbatim in
``source_category``; callers that want the application's category id apply
:func:`map_source_category` themselves. The parser never does.
"""

from __future__ import annotations

from types import MappingProxyType

CATEGORY_IDS: tuple[str, ...] = (
    "travel",
    "communication",
    "entertainment",
    "supplies",
    "books",
    "advertising",
    "outsourcing",
    "rent",
    "utilities",
    "fees",
    "insurance",
    "depreciation",
    "miscellaneous",
)

CATEGORY_MAPPING = MappingProxyType(
    {
        # freee account names
        "旅費交通費": "travel",
        "通信費": "communication",
        "接待交際費": "entertainment",
        "消耗品費": "supplies",
        "新聞図書費": "books",
        "広告宣伝費": "advertising",
        "外注費": "outsourcing",
        "地代家賃": "rent",
        "水道光熱費": "utilities",
        "支払手数料": "fees",
        "保険料": "insurance",
        "減価償却費": "depreciation",
        "雑費": "miscellaneous",
        # Money Forward top-level items
        "交通費": "travel",
        "食費": "entertainment",
        "日用品": "supplies",
        "教養・教育": "books",
        "趣味・娯楽": "miscellaneous",
        # Yayoi account names
        "通信運搬費": "communication",
        "交際費": "entertainment",
        "事務用品費": "supplies",
        "図書費": "books",
    }
)


def map_source_category(label: str | None) -> str | None:
    """Return the application category id for ``label``, or ``None`` if unknown."""

    if label is None:
        return None
    return CATEGORY_MAPPING.get(label.strip())


__all__ = ["CATEGORY_IDS", "CATEGORY_MAPPING", "map_source_category"]
