"""
Module: engine.resolution.records

Purpose:
    Build FlightRecords for one resolved aircraft group, rolling ordnance
    per flight when the tasking calls for it.

Key Functions:
    - group_text(): "4 x {2} US F-15C, CAP"
    - flight_text(): "1 x {2} US F-4G, SEAD (Bombs/CBU/Rockets + ARM)"
    - emit_group(): Complete FlightRecord for one group

Dependencies:
    - core.models.flights: FlightRecord
    - engine.resolution.ordnance: OrdnanceResolver

Used By:
    - engine.resolution.splits
    - engine.patterns.base
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from oob_toolkit.core.models.catalog import SimpleEntry
from oob_toolkit.core.models.flights import FlightRecord
from oob_toolkit.core.models.ranges import RangeTable

from ..dice import RandomDraw
from .ordnance import OrdnanceResolver


def group_text(count: int, size: int, nation: str, aircraft: str, tasking: str) -> str:
    return f"{count} x {{{size}}} {nation} {aircraft}, {tasking}"


def flight_text(size: int, nation: str, aircraft: str, tasking: str, ordnance: str) -> str:
    return f"1 x {{{size}}} {nation} {aircraft}, {tasking} ({ordnance})"


@dataclass(frozen=True)
class GroupContext:
    """
    Everything about a group except the aircraft and its flight count.

    Attributes:
        table_id: Source table
        nationality: Nation flying the aircraft
        tasking: Mission role
        flight_size: Aircraft per flight
        rolls_ordnance: Whether each flight rolls ordnance
        ordnance_nationality: Gating nationality keying ordnance tiers and
            restrictions; None keys them by the flying nationality
        actual_nationality: Requested crew nationality when aliased
        ordnance_table: Tasking-specific ordnance table, if any
    """

    table_id: str
    nationality: str
    tasking: str
    flight_size: int
    rolls_ordnance: bool = False
    ordnance_nationality: Optional[str] = None
    actual_nationality: Optional[str] = None
    ordnance_table: Optional[RangeTable[str]] = None


def emit_group(
    context: GroupContext,
    entry: SimpleEntry,
    flight_count: int,
    draw: RandomDraw,
    ordnance: Optional[OrdnanceResolver],
    *,
    trace_mark: int,
    label_prefix: Optional[str] = None,
    first_flight: int = 1,
) -> FlightRecord:
    """
    Build the record for ``flight_count`` flights of ``entry``.

    Args:
        context: Shared group attributes
        entry: Concrete aircraft
        flight_count: Flights in this group
        draw: Draw source for ordnance rolls
        ordnance: Tier resolver; required when context.rolls_ordnance
        trace_mark: Trace position where this group's rolls began
        label_prefix: Ordnance roll label prefix (defaults to the tasking)
        first_flight: Number of the first flight in ordnance roll labels
    """
    ordnance_lines = ()
    if context.rolls_ordnance and ordnance is not None:
        ordnance_lines = ordnance.resolve_flights(
            draw,
            entry.name,
            context.tasking,
            context.ordnance_nationality or context.nationality,
            flight_count,
            label_prefix or context.tasking,
            table=context.ordnance_table,
            first_flight=first_flight,
        )
        display = "\n".join(
            flight_text(context.flight_size, context.nationality, entry.name, context.tasking, line)
            for line in ordnance_lines
        )
    else:
        display = group_text(
            flight_count, context.flight_size, context.nationality, entry.name, context.tasking
        )

    return FlightRecord(
        aircraft_type=entry.name,
        aircraft_id=entry.aircraft_id,
        nationality=context.nationality,
        actual_nationality=context.actual_nationality,
        tasking=context.tasking,
        flight_size=context.flight_size,
        flight_count=flight_count,
        ordnance=ordnance_lines,
        source_table=context.table_id,
        display_text=display,
        debug_trace=draw.since(trace_mark),
    )
