"""
Module: core.errors

Purpose:
    Exception hierarchy shared by the table models, the loader and the
    resolution engine.

Key Classes:
    - ErrorKind: Which piece of table data was missing or malformed
    - OOBError: Base class for all toolkit exceptions
    - DataError: Requested key absent from a loaded table definition
    - RangeLookupError: No range row matches a roll
    - ConfigurationError: Table id has no resolution pattern / no definition
    - DefinitionError: Table data failed validation at load time
    - LoaderError: Data directory or file could not be read

Dependencies:
    - enum (std)

Used By:
    - core.models.ranges: RangeLookupError
    - engine.patterns: DataError -> DomainError conversion
    - engine.loading.loader: LoaderError, DefinitionError
    - engine.registry: ConfigurationError
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Category of a recoverable data problem."""

    TABLE = "table"
    NATION = "nation"
    NATIONALITY = "nationality"
    TASKING = "tasking"
    VARIANT = "variant"
    RANGE = "range"
    PARAMETER = "parameter"


class OOBError(Exception):
    """Base class for toolkit errors."""
    pass


class DataError(OOBError):
    """
    A table id, nation, nationality, tasking or variant key is absent.

    Always recoverable: processors convert it into a DomainError value
    instead of letting it escape ``process()``.
    """

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.TABLE, table: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.table = table


class RangeLookupError(DataError):
    """Raised when no row of a RangeTable contains the roll."""

    def __init__(self, roll: int, label: str = ""):
        where = f" in {label}" if label else ""
        super().__init__(f"No entry for roll {roll}{where}", kind=ErrorKind.RANGE)
        self.roll = roll
        self.label = label


class ConfigurationError(OOBError):
    """Table id has no known resolution pattern, or no definition was supplied."""
    pass


class DefinitionError(OOBError):
    """Raised when table data fails validation while loading."""

    def __init__(self, message: str, path: str = "", errors: Optional[List[str]] = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


class LoaderError(OOBError):
    """Error reading table definition files."""
    pass
