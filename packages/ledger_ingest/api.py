"""Public API surface for the ``ledger_ingest`` package.

The orchestration lives in :mod:`ledger_ingest.parse` and the format registry
in :mod:`ledger_ingest.ingest.registry`; both are re-exported here so callers
(upload handlers, the manual-mapping screen, the CLI) import from one place.
"""

from __future__ import annotations

from .categories import CATEGORY_MAPPING, map_source_category
from .ingest.registry import ALL_MAPPERS, detect_mapper, get_mapper_by_id
from .parse import manual_mapper, parse_ledger, parse_with_manual_mapping

__all__ = [
    "ALL_MAPPERS",
    "CATEGORY_MAPPING",
    "detect_mapper",
    "get_mapper_by_id",
    "manual_mapper",
    "map_source_category",
    "parse_ledger",
    "parse_with_manual_mapping",
]
