"""Format profiles, adapters, detection and tokenization for ledger files."""
