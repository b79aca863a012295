"""Split delimited ledger text into a header row and data rows.

Delimiter and quote handling is left to the stdlib :mod:`csv` module (quoted
fields with embedded commas/newlines, doubled quotes). This module only adds
what ledger exports need on top of it:

- decoding byte input (UTF-8 with or without BOM, then CP932/Shift_JIS);
- skipping a fixed number of preamble lines above the header;
- dropping blank rows while keeping the file's row numbering stable;
- padding short rows and setting aside surplus cells of long ones.

File-level problems are raised as ``csv.Error`` with an actionable message.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass, field

DEFAULT_ENCODINGS: tuple[str, ...] = ("utf-8-sig", "cp932")


@dataclass(frozen=True, slots=True)
class TokenizedRow:
    """One data row. ``number`` is 1-based with the header line as row 1."""

    number: int
    cells: dict[str, str]
    overflow: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Table:
    headers: tuple[str, ...]
    rows: tuple[TokenizedRow, ...] = field(default_factory=tuple)


def decode_text(data: bytes, encoding: str | None = None) -> str:
    """Decode ``data`` with ``encoding`` or, when unset, the first default that fits."""

    candidates = (encoding,) if encoding else DEFAULT_ENCODINGS
    for enc in candidates:
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
        except LookupError as exc:
            raise csv.Error(f"unknown encoding: {enc!r}") from exc
    raise csv.Error("could not decode file as " + " or ".join(candidates))


def _unique_headers(raw: Sequence[str]) -> tuple[str, ...]:
    """Strip header names and suffix repeats with ``_1``, ``_2``...

    A suffixed name never collides with a name spelled out elsewhere in the
    row (``金額,金額,金額_1`` gives ``金額, 金額_2, 金額_1``), so no column is
    lost when rows become mappings.
    """

    names = [name.strip() for name in raw]
    # Names written in the file keep their spelling wherever they first occur.
    taken = set(names)
    used: set[str] = set()
    out: list[str] = []
    for name in names:
        if name not in used:
            used.add(name)
            out.append(name)
            continue
        suffix = 1
        while f"{name}_{suffix}" in taken or f"{name}_{suffix}" in used:
            suffix += 1
        renamed = f"{name}_{suffix}"
        used.add(renamed)
        out.append(renamed)
    return tuple(out)


def tokenize(text: str, *, skip_rows: int = 0) -> Table:
    """Tokenize ``text`` into a :class:`Table`.

    Raises ``csv.Error`` when the header row is missing or has no named
    column, or when the csv module rejects the input.
    """

    if text.startswith("\ufeff"):
        text = text[1:]
    if skip_rows:
        # Keep original line endings so quoted newlines below survive.
        text = "".join(text.splitlines(keepends=True)[skip_rows:])

    reader = csv.reader(io.StringIO(text))
    raw_header = next(reader, None)
    if raw_header is None or not any(h.strip() for h in raw_header):
        raise csv.Error("file has no header row")
    headers = _unique_headers(raw_header)

    rows: list[TokenizedRow] = []
    for number, cells in enumerate(reader, start=skip_rows + 2):
        if not any(c.strip() for c in cells):
            continue
        padded = list(cells[: len(headers)]) + [""] * (len(headers) - len(cells))
        surplus = cells[len(headers) :]
        # Trailing empty cells (a dangling comma) are not surplus data.
        overflow = tuple(surplus) if any(c.strip() for c in surplus) else ()
        rows.append(TokenizedRow(number=number, cells=dict(zip(headers, padded)), overflow=overflow))

    return Table(headers=headers, rows=tuple(rows))


__all__ = ["DEFAULT_ENCODINGS", "Table", "TokenizedRow", "decode_text", "tokenize"]
