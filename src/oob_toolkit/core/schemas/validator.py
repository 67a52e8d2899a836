"""
Schema Validation Utilities

Validates table-definition JSON files before they are parsed into models,
and checks parsed definitions for range-coverage problems.

**DESIGN DEVIATION FROM LEGACY DATA HANDLING:**

Legacy Problem:
- Table JSON was consumed directly by per-table processors
- A missing roll range surfaced as "No aircraft found for roll N" at play time
- Typos in keys silently produced empty results

Current Solution:
- JSON Schema (draft 7) for the file layout, all errors reported at once
- `coverage_errors()` rejects tables whose ranges do not partition the die
- Fail fast at load time, never at roll time
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import jsonschema

from ..errors import DefinitionError
from ..models.definitions import TableDefinition


# Schema version constants
TABLE_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _format_path(parts) -> str:
    return ".".join(str(p) for p in parts)


def validate_table_file(data: dict[str, Any], *, strict: bool = True) -> None:
    """
    Validate one table-definition file.

    Args:
        data: Parsed JSON of the file
        strict: If True, run full JSON Schema validation; if False, only
            the top-level checks

    Raises:
        DefinitionError: If data is invalid (errors lists every problem)
    """
    if not isinstance(data, dict):
        raise DefinitionError(f"Table file must be an object, got {type(data).__name__}")

    required = ["schema_version", "module", "faction", "tables"]
    missing = [f for f in required if f not in data]
    if missing:
        raise DefinitionError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != TABLE_SCHEMA_VERSION:
        raise DefinitionError(
            f"Unsupported table schema version: {version} (expected {TABLE_SCHEMA_VERSION})",
            path="schema_version",
        )

    if not strict:
        return

    schema = _load_schema("table_definition")
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        first = errors[0]
        raise DefinitionError(
            f"Schema validation failed: {first.message}",
            path=_format_path(first.absolute_path),
            errors=[f"{_format_path(e.absolute_path) or '<root>'}: {e.message}" for e in errors],
        )


def coverage_errors(definition: TableDefinition) -> List[str]:
    """
    Collect gap / overlap problems across every RangeTable of a definition.

    Returns:
        Empty list when every table partitions its die exactly
    """
    problems: List[str] = []
    for _, table in definition.range_tables():
        problems.extend(table.coverage_problems())
    return problems


def validate_coverage(definition: TableDefinition) -> None:
    """
    Raises:
        DefinitionError: If any RangeTable has gaps or overlaps
    """
    problems = coverage_errors(definition)
    if problems:
        raise DefinitionError(
            f"Table {definition.table_id}: {len(problems)} range coverage problem(s)",
            path=definition.table_id,
            errors=problems,
        )
