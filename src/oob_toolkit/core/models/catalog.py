"""
Module: catalog

Purpose:
    Aircraft catalog entries as they appear in table rows. Each entry is
    explicitly tagged when the data is loaded, so the engine never has to
    inspect display names to decide how to resolve it.

Key Classes:
    - EntryKind: SIMPLE / VARIANT / SPLIT tag
    - SimpleEntry: Concrete aircraft designation
    - VariantEntry: Needs one more draw against a nested sub-table
    - SplitEntry: Two designations sharing one table row

Dependencies:
    - core.models.ranges: RangeTable for variant sub-tables

Used By:
    - core.utils.serialization: Builds entries from JSON
    - engine.resolution.variants / splits
    - engine.patterns: Dispatch on entry.kind

Design Deviation from Legacy Data:
    Legacy tables marked variants with trailing superscript glyphs ("F-4²")
    and splits with a joined name ("F-4G/F-4E"). Both are converted into
    these tagged entries once, at load time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .ranges import RangeTable


class EntryKind(str, Enum):
    SIMPLE = "simple"
    VARIANT = "variant"
    SPLIT = "split"


@dataclass(frozen=True, slots=True)
class SimpleEntry:
    """
    A concrete aircraft designation.

    Attributes:
        name: Display designation, e.g. "F-15C"
        aircraft_id: Optional catalog id, e.g. "US-F-15C-1"
    """

    name: str
    aircraft_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Aircraft name cannot be empty")

    @property
    def kind(self) -> EntryKind:
        return EntryKind.SIMPLE


@dataclass(frozen=True)
class VariantEntry:
    """
    An ambiguous designation resolved by one extra draw.

    Attributes:
        name: Family name shown before resolution, e.g. "F-4"
        sub_table: Rows resolving to concrete (or further variant) entries
    """

    name: str
    sub_table: RangeTable["CatalogEntry"]

    @property
    def kind(self) -> EntryKind:
        return EntryKind.VARIANT


@dataclass(frozen=True, slots=True)
class SplitEntry:
    """
    Two designations that divide one tasking's flights between them.

    Attributes:
        first: Receives the larger half when the flight count is odd
        second: Receives the remaining flights
    """

    first: SimpleEntry
    second: SimpleEntry

    @property
    def kind(self) -> EntryKind:
        return EntryKind.SPLIT

    @property
    def name(self) -> str:
        # Debug/trace only; never emitted as an aircraftType
        return f"{self.first.name}/{self.second.name}"


CatalogEntry = Union[SimpleEntry, VariantEntry, SplitEntry]
