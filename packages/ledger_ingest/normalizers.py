"""Field normalizers: raw cell text -> typed values.

Pure functions shared by every format adapter and by the manual mapping
path. None of them look at column names; resolving which cell feeds which
field is the adapters' job.

Conventions
-----------
- Dates come out as zero-padded ``YYYY-MM-DD`` strings. Input that does not
  look like any supported date is returned cleaned but unvalidated; callers
  decide whether that shape is acceptable (see :func:`validate_iso_date`).
- Amounts come out as signed integers. ``0`` doubles as "no amount" because
  a zero-value ledger line carries nothing to import.
- Structurally malformed cells (digits mixed with other text, impossible
  calendar dates) raise ``ValueError``; the orchestrator turns those into
  per-row error entries.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from decimal import Decimal
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

# Japanese era initial -> Gregorian year of era year 0.
ERA_BASE_YEARS = MappingProxyType(
    {
        "R": 2018,  # Reiwa
        "H": 1988,  # Heisei
        "S": 1925,  # Showa
        "T": 1911,  # Taisho
        "M": 1867,  # Meiji
    }
)

_YMD_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_ERA_RE = re.compile(
    r"^([" + "".join(ERA_BASE_YEARS) + r"])(\d{1,2})-(\d{1,2})-(\d{1,2})$",
    re.IGNORECASE,
)
_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_KANJI_SPACING_RE = re.compile(r"\s*([年月])\s*|\s+(?=日)")


def _fmt_ymd(year: int | str, month: str, day: str) -> str:
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def normalize_date(raw: str | None) -> str:
    """Normalize a date-like cell to ``YYYY-MM-DD``.

    Accepted shapes: ``YYYY-MM-DD``, ``YYYY/MM/DD``, ``YYYY年M月D日`` and era
    notation such as ``R6/01/15`` (letter, 1-2 digit era year, month, day).
    A trailing time component is ignored. Anything else is returned after
    cleaning, unchanged otherwise; an empty cell yields ``""``.
    """

    if raw is None:
        return ""
    s = unicodedata.normalize("NFKC", raw).strip()
    if not s:
        return ""
    # "2024年 3月 5日" is one token; spaces after 日 still separate a time.
    s = _KANJI_SPACING_RE.sub(r"\1", s)
    # Drop a time component: "2024/03/01 12:34" or "2024-03-01T12:34:56".
    s = s.split()[0]
    if s[:4].isdigit() and "T" in s:
        s = s.split("T", 1)[0]

    cleaned = s.replace("/", "-").replace("年", "-").replace("月", "-").replace("日", "")

    m = _YMD_RE.match(cleaned)
    if m:
        return _fmt_ymd(*m.groups())

    m = _ERA_RE.match(cleaned)
    if m:
        era, era_year, month, day = m.groups()
        return _fmt_ymd(ERA_BASE_YEARS[era.upper()] + int(era_year), month, day)

    return cleaned


def validate_iso_date(value: str) -> str | None:
    """Return ``value`` when it is a real ``YYYY-MM-DD`` date.

    Returns ``None`` when the shape does not match (a validation failure the
    caller should treat as a skip). Raises ``ValueError`` when the shape
    matches but the calendar rejects it, e.g. ``2024-02-30``.
    """

    if not _ISO_RE.match(value):
        return None
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"invalid date: {value!r}") from exc
    return value


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

# Glyphs some ledgers print in place of a minus sign, valid at either end.
NEGATIVE_GLYPHS = "▲△"
_MINUS_SIGNS = "-−"
_STRIP_RE = re.compile(r"[,円¥$\s]")
_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?")


def normalize_amount(raw: str | None, *, allow_trailing_minus: bool = True) -> int:
    """Parse a money cell into a signed integer.

    Full-width forms are folded first (``￥１，０００`` reads as ``¥1,000``),
    then thousands separators, currency marks and whitespace are dropped.
    Negative values may be spelled with a leading minus, a trailing minus
    (unless ``allow_trailing_minus`` is false), ``▲``/``△`` at either end, or
    surrounding parentheses. A fractional part is truncated toward zero.

    Returns ``0`` when the cell holds no digits at all. Raises ``ValueError``
    when digits are mixed with anything else.
    """

    if raw is None:
        return 0
    s = _STRIP_RE.sub("", unicodedata.normalize("NFKC", raw))
    if not any(ch.isdigit() for ch in s):
        return 0

    negative = False
    if len(s) >= 2 and s[0] == "(" and s[-1] == ")":
        negative = True
        s = s[1:-1]
    if s[:1] == "+":
        s = s[1:]
    elif s[:1] and s[0] in _MINUS_SIGNS + NEGATIVE_GLYPHS:
        negative = True
        s = s[1:]
    elif s[-1:] and s[-1] in NEGATIVE_GLYPHS:
        negative = True
        s = s[:-1]
    elif allow_trailing_minus and s[-1:] and s[-1] in _MINUS_SIGNS:
        negative = True
        s = s[:-1]

    if not _NUMBER_RE.fullmatch(s):
        raise ValueError(f"invalid amount: {raw!r}")
    value = int(Decimal(s))
    return -value if negative else value


# ---------------------------------------------------------------------------
# Display text
# ---------------------------------------------------------------------------

UNKNOWN_COUNTERPARTY = "不明"

_CORPORATE_SUFFIX_RE = re.compile(r"^(.+?(?:株式会社|有限会社|合同会社|㈱|㈲))")


def clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    # Collapse internal whitespace (including newlines) and strip.
    cleaned = re.sub(r"\s+", " ", value).strip()
    return cleaned or None


def strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def derive_counterparty(description: str | None) -> str:
    """Guess a counterparty name from a free-text description.

    ``"○○株式会社 請求書No.123"`` -> ``"○○株式会社"``;
    ``"Amazon.co.jp ビジネス書籍"`` -> ``"Amazon.co.jp"``. The text is cut after
    the first corporate-entity suffix, otherwise at the first whitespace run.
    An empty description yields :data:`UNKNOWN_COUNTERPARTY`.
    """

    text = (description or "").strip()
    if not text:
        return UNKNOWN_COUNTERPARTY
    m = _CORPORATE_SUFFIX_RE.match(text)
    if m:
        return m.group(1).strip()
    return re.split(r"\s+", text, maxsplit=1)[0]


__all__ = [
    "ERA_BASE_YEARS",
    "NEGATIVE_GLYPHS",
    "UNKNOWN_COUNTERPARTY",
    "normalize_date",
    "validate_iso_date",
    "normalize_amount",
    "clean_text",
    "strip_or_none",
    "derive_counterparty",
]
