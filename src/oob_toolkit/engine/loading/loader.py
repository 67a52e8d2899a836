"""
Module: engine.loading.loader

Purpose:
    Load every table-definition file below a data directory, validate it
    and parse it into TableDefinitions.

Key Functions:
    - load_definitions(): All tables under a data directory
    - load_table_file(): One JSON file
    - discover_table_files(): Find <module>/*.json files

Dependencies:
    - json (std)
    - pathlib (std)
    - core.schemas.validator: JSON Schema + coverage checks
    - core.utils.serialization: JSON -> models

Used By:
    - engine.registry: Lazy definition loading
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from oob_toolkit.core.errors import DefinitionError, LoaderError
from oob_toolkit.core.models.definitions import TableDefinition
from oob_toolkit.core.schemas.validator import coverage_errors, validate_table_file
from oob_toolkit.core.utils.serialization import parse_table_file


logger = logging.getLogger(__name__)


def discover_table_files(data_dir: Path) -> List[Path]:
    """
    Find table files, one directory per game module.

    Returns:
        Sorted list of *.json paths
    """
    if not data_dir.exists():
        raise LoaderError(f"Data directory does not exist: {data_dir}")
    if not data_dir.is_dir():
        raise LoaderError(f"Data path is not a directory: {data_dir}")
    return sorted(p for p in data_dir.glob("*/*.json") if p.is_file())


def load_table_file(
    path: Path,
    *,
    validate_schema: bool = True,
    strict_ranges: bool = True,
) -> Dict[str, TableDefinition]:
    """
    Load and parse one table file.

    Args:
        path: JSON file path
        validate_schema: Run full JSON Schema validation
        strict_ranges: Reject tables whose ranges do not partition the die

    Returns:
        Table id -> TableDefinition

    Raises:
        LoaderError: File unreadable or not JSON
        DefinitionError: Schema, parse or coverage failure
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e

    try:
        validate_table_file(data, strict=validate_schema)
        definitions = parse_table_file(data)
    except DefinitionError as e:
        raise DefinitionError(f"{path.name}: {e}", path=e.path, errors=e.errors) from e

    for table_id, definition in definitions.items():
        problems = coverage_errors(definition)
        if not problems:
            continue
        if strict_ranges:
            raise DefinitionError(
                f"{path.name}: table {table_id} has {len(problems)} range coverage problem(s)",
                path=table_id,
                errors=problems,
            )
        for problem in problems:
            logger.warning(f"{path.name}: {problem}")

    return definitions


def load_definitions(
    data_dir: Path,
    *,
    module: Optional[str] = None,
    validate_schema: bool = True,
    strict_ranges: bool = True,
) -> Dict[str, TableDefinition]:
    """
    Load all table definitions below ``data_dir``.

    Args:
        data_dir: Root directory
        module: Only load files of this module directory
        validate_schema: Run full JSON Schema validation
        strict_ranges: Reject malformed range tables

    Returns:
        Table id -> TableDefinition

    Raises:
        LoaderError: Missing directory, unreadable file, duplicate table id
        DefinitionError: Invalid table data

    Example:
        >>> definitions = load_definitions(DEFAULT_DATA_DIR)
        >>> definitions["C"].faction
        'NATO'
    """
    definitions: Dict[str, TableDefinition] = {}
    files = discover_table_files(data_dir)
    if module is not None:
        files = [p for p in files if p.parent.name == module]

    for path in files:
        loaded = load_table_file(path, validate_schema=validate_schema, strict_ranges=strict_ranges)
        for table_id, definition in loaded.items():
            if table_id in definitions:
                raise LoaderError(
                    f"Duplicate table id {table_id!r} in {path} "
                    f"(already defined by module {definitions[table_id].module})"
                )
            definitions[table_id] = definition
        logger.debug(f"Loaded {len(loaded)} tables from {path}")

    logger.info(f"Loaded {len(definitions)} table definitions from {data_dir}")
    return definitions
