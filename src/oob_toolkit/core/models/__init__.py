"""
Core Models Package

Immutable data models shared by the loader and the resolution engine.

All models are frozen dataclasses. Definitions are read-only after load;
FlightRecord / Result are created fresh for every resolution.

| Model | Role |
|-------|------|
| `RangeTable` | Die range -> entry lookup |
| `SimpleEntry` / `VariantEntry` / `SplitEntry` | Tagged aircraft catalog entries |
| `TableDefinition` | Parsed table data |
| `FlightRecord` / `Result` | Canonical output |
| `DomainError` | Recoverable failure value |
"""

from .ranges import RollRange, RangeTable
from .catalog import CatalogEntry, EntryKind, SimpleEntry, SplitEntry, VariantEntry
from .flights import DomainError, FlightRecord, Result, FACTIONS
from .definitions import (
    AircraftLeaf,
    BranchNode,
    NationalityDefinition,
    NationEntry,
    NationsLeaf,
    Overrides,
    SlotDefinition,
    SourceNode,
    TableDefinition,
)

__all__ = [
    "RollRange",
    "RangeTable",
    "CatalogEntry",
    "EntryKind",
    "SimpleEntry",
    "SplitEntry",
    "VariantEntry",
    "DomainError",
    "FlightRecord",
    "Result",
    "FACTIONS",
    "AircraftLeaf",
    "BranchNode",
    "NationalityDefinition",
    "NationEntry",
    "NationsLeaf",
    "Overrides",
    "SlotDefinition",
    "SourceNode",
    "TableDefinition",
]
