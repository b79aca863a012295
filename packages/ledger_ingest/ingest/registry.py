"""Ordered mapper registry and header-based format detection.

Order is the tie-break: several detectors can accept the same header row
(the generic one accepts almost anything with a date and an amount), and the
first mapper in :data:`ALL_MAPPERS` that says yes wins. Keep the most
specific formats first and the generic catch-all last; moving an entry
changes which format claims ambiguous files.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..logging_setup import get_logger
from .adapters import freee_csv, generic_csv, moneyforward_csv, yayoi_csv
from .mapping import Mapper

logger = get_logger("ledger_ingest.ingest.registry")

ALL_MAPPERS: tuple[Mapper, ...] = (
    freee_csv.MAPPER,
    moneyforward_csv.MAPPER,
    yayoi_csv.MAPPER,
    generic_csv.MAPPER,
)


def detect_mapper(
    headers: Sequence[str], mappers: Sequence[Mapper] = ALL_MAPPERS
) -> Mapper | None:
    """Return the first mapper whose ``detect`` accepts ``headers``."""

    for mapper in mappers:
        if mapper.detect(headers):
            logger.debug("header row matched profile %s", mapper.id)
            return mapper
    return None


def get_mapper_by_id(profile_id: str, mappers: Sequence[Mapper] = ALL_MAPPERS) -> Mapper | None:
    for mapper in mappers:
        if mapper.id == profile_id:
            return mapper
    return None


__all__ = ["ALL_MAPPERS", "detect_mapper", "get_mapper_by_id"]
