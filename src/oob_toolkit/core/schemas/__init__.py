"""
Schemas Package

JSON Schema definitions and validation for table-definition files.
"""

from .validator import (
    TABLE_SCHEMA_VERSION,
    coverage_errors,
    validate_coverage,
    validate_table_file,
)

__all__ = [
    "TABLE_SCHEMA_VERSION",
    "coverage_errors",
    "validate_coverage",
    "validate_table_file",
]
