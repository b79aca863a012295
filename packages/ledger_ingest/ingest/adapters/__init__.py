"""Per-format adapters. Each module exposes ``PROFILE``, ``to_ctv`` and ``MAPPER``."""
