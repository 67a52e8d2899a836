"""
Module: flights

Purpose:
    Canonical output of a table resolution: one Result envelope holding
    one or more FlightRecords, or a DomainError value in place of a result.

Key Classes:
    - FlightRecord: A group of aircraft sharing nation, tasking and size
    - Result: Table-level envelope with combined display text and trace
    - DomainError: Recoverable failure returned instead of a Result

Dependencies:
    - dataclasses (std)
    - core.errors: ErrorKind

Used By:
    - engine.patterns: Every processor emits these directly
    - engine.contract.normalizer: Legacy dict shapes map onto these
    - engine.contract.validator: Invariant checks
    - engine.controller: Public resolve() return type

Design Deviation from Legacy Shapes:
    Legacy processors returned five different dict layouts (flat,
    taskings[], flights[], flightResults[], canonical). Processors here
    always build a Result; to_dict() emits the single camelCase contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..errors import ErrorKind

FACTIONS = ("NATO", "WP")


@dataclass(frozen=True)
class FlightRecord:
    """
    One emitted output unit (immutable).

    No construction-time validation: legacy results may be imperfect and
    are reported by validate() rather than rejected.

    Attributes:
        aircraft_type: Concrete designation, never a joined split name
        nationality: Nation flying the aircraft
        tasking: Mission role, e.g. "CAP", "SEAD"
        flight_size: Aircraft per flight
        flight_count: Number of flights in this group
        aircraft_id: Catalog id if known
        actual_nationality: Requested crew nationality when an alias mapped
            it onto another nationality's package
        ordnance: One description per flight, or empty when not rolled
        source_table: Table id that produced the record
        display_text: Human-readable line(s), newline separated per flight
        debug_trace: "label: value" roll entries that produced this record
        notes: Text attached by an external note-rules collaborator
    """

    aircraft_type: str
    nationality: str
    tasking: str
    flight_size: int
    flight_count: int
    aircraft_id: Optional[str] = None
    actual_nationality: Optional[str] = None
    ordnance: Tuple[str, ...] = ()
    source_table: Optional[str] = None
    display_text: str = ""
    debug_trace: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()

    @property
    def total_aircraft(self) -> int:
        return self.flight_size * self.flight_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aircraftType": self.aircraft_type,
            "aircraftId": self.aircraft_id,
            "nationality": self.nationality,
            "actualNationality": self.actual_nationality,
            "tasking": self.tasking,
            "flightSize": self.flight_size,
            "flightCount": self.flight_count,
            "ordnance": list(self.ordnance),
            "sourceTable": self.source_table,
            "displayText": self.display_text,
            "debugTrace": list(self.debug_trace),
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class Result:
    """
    Canonical resolution envelope (immutable).

    Attributes:
        table: Table id, e.g. "C"
        faction: "NATO" or "WP"
        flights: Emitted flight records, in tasking order
        raid_type: Optional raid / mission description
        display_text: Flight display texts joined by newlines
        debug_trace: Every roll of the resolution, in draw order

    Example:
        >>> result = resolve("G", rng=ForcedRolls([1, 1]))
        >>> result.flights[0].tasking
        'CAP'
    """

    table: str
    faction: str
    flights: Tuple[FlightRecord, ...]
    raid_type: Optional[str] = None
    display_text: str = ""
    debug_trace: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def flight_count(self) -> int:
        return sum(f.flight_count for f in self.flights)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "faction": self.faction,
            "raidType": self.raid_type,
            "flights": [f.to_dict() for f in self.flights],
            "displayText": self.display_text,
            "debugTrace": list(self.debug_trace),
        }


@dataclass(frozen=True, slots=True)
class DomainError:
    """
    Structured failure returned in place of a Result.

    Attributes:
        kind: Which piece of data was missing
        message: Descriptive text suitable for display
        table: Table id the failure belongs to
    """

    kind: ErrorKind
    message: str
    table: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind.value, "table": self.table}

    def __str__(self) -> str:
        prefix = f"Table {self.table}: " if self.table else ""
        return f"{prefix}{self.message}"
