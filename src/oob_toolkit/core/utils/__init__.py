"""Core utilities."""

from .serialization import (
    LEGACY_VARIANT_TABLES,
    migrate_legacy_entry,
    parse_entry,
    parse_table_definition,
    parse_table_file,
    strip_legacy_marker,
)

__all__ = [
    "LEGACY_VARIANT_TABLES",
    "migrate_legacy_entry",
    "parse_entry",
    "parse_table_definition",
    "parse_table_file",
    "strip_legacy_marker",
]
