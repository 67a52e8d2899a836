"""
Loading Package

Reads table-definition JSON from disk.
"""

from oob_toolkit.core.errors import DefinitionError, LoaderError

from .loader import discover_table_files, load_definitions, load_table_file

__all__ = [
    "DefinitionError",
    "LoaderError",
    "discover_table_files",
    "load_definitions",
    "load_table_file",
]
