"""
Module: definitions

Purpose:
    Read-only, parsed form of one table's JSON definition: which taskings
    it produces, how each tasking finds its aircraft, and the ordnance
    tiers it rolls against.

Key Classes:
    - Overrides: Per-leaf tasking / size / count replacements
    - NationEntry: One nation row with its aircraft sub-table
    - NationsLeaf: Draw a nation, then an aircraft scoped to it
    - AircraftLeaf: Fixed nation, draw an aircraft only
    - BranchNode: Pick a child by a caller parameter value
    - SlotDefinition: One tasking of a table
    - NationalityDefinition: Tasking set gated by a sub-faction
    - TableDefinition: Complete table

Dependencies:
    - core.models.ranges: RangeTable
    - core.models.catalog: CatalogEntry variants

Used By:
    - core.utils.serialization: Builds these from JSON
    - engine.patterns: Walks source nodes during resolution
    - engine.loading.loader: Coverage checks over range_tables()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from .catalog import CatalogEntry, EntryKind
from .flights import FACTIONS
from .ranges import RangeTable


@dataclass(frozen=True, slots=True)
class Overrides:
    """Leaf-level replacements for the slot's tasking, flight size and count."""

    tasking: Optional[str] = None
    flight_size: Optional[int] = None
    flight_count: Optional[int] = None


@dataclass(frozen=True)
class NationEntry:
    """
    One nation row of a nation table.

    Attributes:
        name: Nation label, possibly composite ("NE/CAN")
        aircraft: Aircraft table scoped to this nation
        resolve: Aircraft name -> nation actually flying it, for composite rows
    """

    name: str
    aircraft: RangeTable[CatalogEntry]
    resolve: Mapping[str, str] = field(default_factory=dict)

    def nationality_for(self, aircraft_name: str) -> str:
        return self.resolve.get(aircraft_name, self.name)


@dataclass(frozen=True)
class NationsLeaf:
    nations: RangeTable[NationEntry]
    overrides: Overrides = field(default_factory=Overrides)


@dataclass(frozen=True)
class AircraftLeaf:
    """Aircraft-only leaf. ``nation`` of None means the gating nationality."""

    aircraft: RangeTable[CatalogEntry]
    nation: Optional[str] = None
    overrides: Overrides = field(default_factory=Overrides)


@dataclass(frozen=True)
class BranchNode:
    """
    Select a child node by the value of a caller parameter.

    Attributes:
        param: Parameter name, e.g. "scenarioDate"
        options: Parameter value -> child node
        ordinals: Ordinal value ("1", "2", ...) -> option key, so callers
            may pass scenario dates by position
    """

    param: str
    options: Mapping[str, "SourceNode"]
    ordinals: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for ordinal, key in self.ordinals.items():
            if key not in self.options:
                raise ValueError(f"{self.param} ordinal {ordinal} names unknown option {key!r}")

    def option_key(self, value: str) -> Optional[str]:
        """Option key for a caller value, accepting ordinals; None if unknown."""
        if value in self.options:
            return value
        return self.ordinals.get(value)


SourceNode = Union[BranchNode, NationsLeaf, AircraftLeaf]


@dataclass(frozen=True)
class SlotDefinition:
    """
    One tasking of a table.

    Attributes:
        tasking: Mission role label
        flight_size: Aircraft per flight
        flight_count: Flights generated for the tasking
        rolls_ordnance: Roll ordnance once per generated flight
        source: Where the aircraft comes from
        ordnance_rolls: Tasking's own ordnance table, rolled unmodified
            instead of the table's nationality tiers
        aircraft_per_flight: Roll the aircraft separately for every flight
            and emit one record per flight
    """

    tasking: str
    flight_size: int
    flight_count: int
    source: SourceNode
    rolls_ordnance: bool = False
    ordnance_rolls: Optional[RangeTable[str]] = None
    aircraft_per_flight: bool = False

    def __post_init__(self) -> None:
        if not self.tasking:
            raise ValueError("Slot tasking cannot be empty")
        if self.flight_size <= 0:
            raise ValueError(f"flight_size must be positive: {self.flight_size}")
        if self.flight_count <= 0:
            raise ValueError(f"flight_count must be positive: {self.flight_count}")
        if self.ordnance_rolls is not None and not self.rolls_ordnance:
            raise ValueError(f"{self.tasking}: ordnance rolls given but ordnance is disabled")

    @property
    def needs_tiers(self) -> bool:
        """Rolls ordnance against the table's nationality tiers."""
        return self.rolls_ordnance and self.ordnance_rolls is None


@dataclass(frozen=True)
class NationalityDefinition:
    name: str
    slots: Tuple[SlotDefinition, ...]
    raid_type: Optional[str] = None


@dataclass(frozen=True)
class TableDefinition:
    """
    Complete read-only table definition.

    Attributes:
        table_id: Short id, e.g. "C" or "L2"
        name: Descriptive title
        faction: "NATO" or "WP"
        module: Game module id, e.g. "red-storm"
        slots: Taskings for non-gated tables
        raid_type: Optional raid description
        nationality_roll: Upfront sub-faction draw (gated tables)
        nationality_param: Caller parameter naming the sub-faction instead
        nationality_aliases: Requested nationality -> package key
        nationalities: Package key -> gated tasking set
        ordnance_tiers: Nationality (or "*") -> ordnance tier table
        pattern: Optional resolution-pattern hint from the data file
    """

    table_id: str
    name: str
    faction: str
    module: str
    slots: Tuple[SlotDefinition, ...] = ()
    raid_type: Optional[str] = None
    nationality_roll: Optional[RangeTable[str]] = None
    nationality_param: Optional[str] = None
    nationality_aliases: Mapping[str, str] = field(default_factory=dict)
    nationalities: Mapping[str, NationalityDefinition] = field(default_factory=dict)
    ordnance_tiers: Mapping[str, RangeTable[str]] = field(default_factory=dict)
    pattern: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.table_id:
            raise ValueError("table_id cannot be empty")
        if self.faction not in FACTIONS:
            raise ValueError(f"faction must be one of {FACTIONS}: {self.faction!r}")

    @property
    def is_gated(self) -> bool:
        return bool(self.nationalities)

    @property
    def tasking_names(self) -> Tuple[str, ...]:
        names: Dict[str, None] = {}
        for slot in self.all_slots():
            names.setdefault(slot.tasking, None)
        return tuple(names)

    def all_slots(self) -> Iterator[SlotDefinition]:
        yield from self.slots
        for nationality in self.nationalities.values():
            yield from nationality.slots

    def range_tables(self) -> Iterator[Tuple[str, RangeTable]]:
        """
        Yield every RangeTable reachable from this definition.

        Yields:
            (label, table) pairs; labels come from the tables themselves
        """
        if self.nationality_roll is not None:
            yield self.nationality_roll.label, self.nationality_roll
        for tiers in self.ordnance_tiers.values():
            yield tiers.label, tiers
        for slot in self.all_slots():
            if slot.ordnance_rolls is not None:
                yield slot.ordnance_rolls.label, slot.ordnance_rolls
            yield from _walk_node(slot.source)


def _walk_node(node: SourceNode) -> Iterator[Tuple[str, RangeTable]]:
    if isinstance(node, BranchNode):
        for child in node.options.values():
            yield from _walk_node(child)
    elif isinstance(node, NationsLeaf):
        yield node.nations.label, node.nations
        for nation in node.nations.entries:
            yield from _walk_entries(nation.aircraft)
    else:
        yield from _walk_entries(node.aircraft)


def _walk_entries(table: RangeTable[CatalogEntry]) -> Iterator[Tuple[str, RangeTable]]:
    yield table.label, table
    for entry in table.entries:
        if entry.kind is EntryKind.VARIANT:
            yield from _walk_entries(entry.sub_table)
