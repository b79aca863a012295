"""Parse orchestration: tokenize -> detect -> map, or stop for manual mapping.

Entry points
------------
- :func:`parse_ledger` auto-detects the export format from the header row.
  It returns :class:`~ledger_ingest.models.Detected` with the imported
  records, :class:`~ledger_ingest.models.NeedsManualMapping` with a preview
  when no registered format recognizes the headers, or
  :class:`~ledger_ingest.models.Failed` when the file cannot be tokenized.
- :func:`parse_with_manual_mapping` skips detection and maps rows with an
  explicit field -> column assignment, reusing the same normalizers and
  validation rules.

Row handling
------------
Every data row is mapped independently and in file order. A row the mapper
declines (format rule or missing required field) is counted as skipped. A
row that raises is also skipped and additionally reported as
``"row <n>: <message>"``, where ``n`` is the row's position in the file with
the header as row 1. One bad row never aborts the file.
"""

from __future__ import annotations

import csv
from collections.abc import Mapping, Sequence
from functools import partial
from types import MappingProxyType
from typing import TypeAlias

from .ctv import CanonicalTransaction
from .ingest.mapping import Mapper, map_by_aliases
from .ingest.profiles import FormatProfile
from .ingest.registry import ALL_MAPPERS, detect_mapper
from .ingest.tokenize import Table, decode_text, tokenize
from .logging_setup import get_logger
from .models import (
    Detected,
    Failed,
    ManualMapping,
    NeedsManualMapping,
    ParseOptions,
    ParseOutcome,
)

logger = get_logger("ledger_ingest.parse")

MANUAL_PROFILE_ID = "manual"

LedgerInput: TypeAlias = str | bytes


def _read_table(data: LedgerInput, options: ParseOptions) -> Table | Failed:
    try:
        if isinstance(data, bytes | bytearray):
            text = decode_text(bytes(data), options.encoding)
        else:
            text = data
        table = tokenize(text, skip_rows=options.skip_rows)
    except csv.Error as exc:
        logger.info("could not tokenize ledger: %s", exc)
        return Failed(errors=(f"failed to parse CSV: {exc}",))
    logger.debug("tokenized %d data rows under %d headers", len(table.rows), len(table.headers))
    return table


def _map_rows(mapper: Mapper, table: Table) -> Detected:
    records: list[CanonicalTransaction] = []
    errors: list[str] = []
    skipped = 0
    width = len(table.headers)

    for row in table.rows:
        try:
            if row.overflow:
                raise ValueError(
                    f"expected {width} cells, found {width + len(row.overflow)}"
                )
            record = mapper.map(row.cells)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("row %d: %s", row.number, message)
            errors.append(f"row {row.number}: {message}")
            skipped += 1
            continue
        if record is None:
            skipped += 1
            continue
        records.append(record)

    logger.info(
        "profile %s: %d of %d rows imported (%d skipped, %d errors)",
        mapper.id,
        len(records),
        len(table.rows),
        skipped,
        len(errors),
    )
    return Detected(
        profile_id=mapper.id,
        profile_name=mapper.profile.name_ja,
        records=tuple(records),
        total_row_count=len(table.rows),
        skipped_row_count=skipped,
        errors=tuple(errors),
    )


def parse_ledger(
    data: LedgerInput,
    options: ParseOptions | None = None,
    *,
    mappers: Sequence[Mapper] = ALL_MAPPERS,
) -> ParseOutcome:
    """Parse a ledger export, detecting its format from the header row.

    Parameters
    ----------
    data:
        File contents as text, or as bytes to be decoded per
        ``options.encoding``.
    options:
        Decode/preamble/preview settings; defaults to :class:`ParseOptions()`.
    mappers:
        Candidate mappers in priority order (the registry by default).
    """

    options = options or ParseOptions()
    table = _read_table(data, options)
    if isinstance(table, Failed):
        return table

    mapper = detect_mapper(table.headers, mappers)
    if mapper is None:
        logger.info("no known format matches headers %s", list(table.headers))
        return NeedsManualMapping(
            headers=table.headers,
            sample_rows=tuple(
                MappingProxyType(dict(r.cells)) for r in table.rows[: options.sample_size]
            ),
            total_row_count=len(table.rows),
        )

    logger.info("detected format %s (%s)", mapper.id, mapper.profile.name)
    return _map_rows(mapper, table)


def manual_mapper(mapping: ManualMapping) -> Mapper:
    """Build a one-off mapper from an explicit field -> column assignment."""

    profile = FormatProfile(
        id=MANUAL_PROFILE_ID,
        name="Manual",
        name_ja="カスタム",
        required_headers=(mapping.date, mapping.amount, mapping.counterparty),
        date=(mapping.date,),
        amount=(mapping.amount,),
        counterparty=(mapping.counterparty,),
        memo=(mapping.memo,) if mapping.memo else (),
        category=(mapping.category,) if mapping.category else (),
    )
    return Mapper(profile=profile, detect=profile.matches_headers, map=partial(map_by_aliases, profile))


def parse_with_manual_mapping(
    data: LedgerInput,
    mapping: ManualMapping | Mapping[str, str | None],
    options: ParseOptions | None = None,
) -> ParseOutcome:
    """Parse a ledger with columns assigned by a person instead of detection.

    ``mapping`` may be a :class:`ManualMapping` or a plain mapping with the
    same keys; the latter is validated and raises ``pydantic.ValidationError``
    when malformed. Columns absent from the file's header row yield a
    :class:`Failed` outcome naming them.
    """

    if not isinstance(mapping, ManualMapping):
        mapping = ManualMapping.model_validate(dict(mapping))
    options = options or ParseOptions()
    table = _read_table(data, options)
    if isinstance(table, Failed):
        return table

    missing = [
        f"{field}: column {column!r} not found in header"
        for field, column in mapping.columns().items()
        if column not in table.headers
    ]
    if missing:
        return Failed(errors=tuple(missing))

    return _map_rows(manual_mapper(mapping), table)


__all__ = [
    "MANUAL_PROFILE_ID",
    "LedgerInput",
    "manual_mapper",
    "parse_ledger",
    "parse_with_manual_mapping",
]
