"""Public interface for the ``ledger_ingest`` package.

Symbol re-exports only; see :mod:`ledger_ingest.api` for the entry points and
:mod:`ledger_ingest.models` for the result and input types.
"""

from .api import (
    ALL_MAPPERS,
    CATEGORY_MAPPING,
    detect_mapper,
    get_mapper_by_id,
    manual_mapper,
    map_source_category,
    parse_ledger,
    parse_with_manual_mapping,
)
from .ctv import CanonicalTransaction
from .ingest.mapping import Mapper
from .ingest.profiles import FormatProfile
from .models import (
    Detected,
    Failed,
    ManualMapping,
    NeedsManualMapping,
    ParseOptions,
    ParseOutcome,
    RawRow,
)

__all__ = [
    # API
    "parse_ledger",
    "parse_with_manual_mapping",
    "detect_mapper",
    "get_mapper_by_id",
    "manual_mapper",
    "map_source_category",
    "ALL_MAPPERS",
    "CATEGORY_MAPPING",
    # Models / types
    "CanonicalTransaction",
    "FormatProfile",
    "Mapper",
    "RawRow",
    "ParseOutcome",
    "Detected",
    "NeedsManualMapping",
    "Failed",
    "ParseOptions",
    "ManualMapping",
]
