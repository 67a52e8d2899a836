"""
Module: engine.contract.normalizer

Purpose:
    Bridge from the five legacy result layouts onto the canonical Result.
    Processors in this package already emit Result objects; normalize()
    exists for results produced elsewhere (saved sessions, older
    processors, hand-written fixtures).

Key Functions:
    - normalize(): Any supported shape -> Result
    - flight_from_mapping(): One legacy flight dict -> FlightRecord

Detection order (most specific first):
    1. Result instance, or canonical dict (flights[] + table + faction)
    2. taskings[] / taskingResults[]
    3. flights[] / flightResults[] missing table or faction
    4. Flat single-flight dict

Field aliases:
    aircraft -> aircraftType
    nationName -> nationality
    flightType | type -> tasking
    quantity -> flightCount
    text -> displayText
    debugText | debugRolls -> debugTrace
    sourceTable | table -> table (top level, first flight, first tasking,
        then the caller fallback)

Dependencies:
    - core.models.flights: Result, FlightRecord

Used By:
    - engine.controller: resolve() pipeline and public normalize()
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from oob_toolkit.core.models.flights import FlightRecord, Result

logger = logging.getLogger(__name__)

TRACE_SEPARATOR = " | "


# ─────────────────────────────────────────────────────────────────────────────
# Field Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _first(obj: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key holding a truthy value, else None."""
    for key in keys:
        value = obj.get(key)
        if value:
            return value
    return None


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_trace(value: Any) -> Tuple[str, ...]:
    """
    Normalize a debug trace into separate "label: value" entries.

    Example:
        >>> parse_trace("[Nation: 3 | Aircraft: 7]")
        ('Nation: 3', 'Aircraft: 7')
    """
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    entries: List[str] = []
    for item in value:
        text = str(item).replace("[", "").replace("]", "")
        entries.extend(part.strip() for part in text.split(TRACE_SEPARATOR) if part.strip())
    return tuple(entries)


def _ordnance(value: Any, flight_count: int) -> Tuple[str, ...]:
    """One description per flight; a single string applies to every flight."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,) * max(flight_count, 1)
    return tuple(str(v) for v in value)


def _list_field(raw: Mapping[str, Any], *keys: str) -> Optional[Sequence[Any]]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, (list, tuple)) and value:
            return value
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Flight / Meta Extraction
# ─────────────────────────────────────────────────────────────────────────────

def flight_from_mapping(obj: Any, table: Optional[str] = None) -> FlightRecord:
    """
    Resolve aliases of one flight-like object.

    Args:
        obj: Legacy flight dict, or an existing FlightRecord (returned as is)
        table: Table id used when the flight names none
    """
    if isinstance(obj, FlightRecord):
        return obj

    flight_count = _as_int(_first(obj, "flightCount", "quantity"), 1)
    return FlightRecord(
        aircraft_type=_first(obj, "aircraftType", "aircraft") or "",
        aircraft_id=obj.get("aircraftId"),
        nationality=_first(obj, "nationality", "nationName") or "",
        actual_nationality=obj.get("actualNationality"),
        tasking=_first(obj, "tasking", "flightType", "type") or "",
        flight_size=_as_int(obj.get("flightSize"), 0),
        flight_count=flight_count,
        ordnance=_ordnance(obj.get("ordnance"), flight_count),
        source_table=_first(obj, "sourceTable", "table") or table,
        display_text=_first(obj, "displayText", "text") or "",
        debug_trace=parse_trace(_first(obj, "debugTrace", "debugRolls", "debugText")),
        notes=tuple(obj.get("notes") or ()),
    )


def _find_table(
    raw: Mapping[str, Any],
    nested: Iterable[Optional[Sequence[Any]]],
    fallback: Optional[str],
) -> str:
    table = _first(raw, "table", "sourceTable")
    if table:
        return table
    for entries in nested:
        if entries:
            head = entries[0]
            if isinstance(head, FlightRecord):
                table = head.source_table
            elif isinstance(head, Mapping):
                table = _first(head, "table", "sourceTable")
            if table:
                return table
    return fallback or ""


def _envelope(
    raw: Mapping[str, Any],
    flights_raw: Sequence[Any],
    table: str,
    fallback_faction: Optional[str],
) -> Result:
    return Result(
        table=table,
        faction=raw.get("faction") or fallback_faction or "",
        flights=tuple(flight_from_mapping(f, table or None) for f in flights_raw),
        raid_type=raw.get("raidType") or None,
        display_text=_first(raw, "displayText", "text") or "",
        debug_trace=parse_trace(_first(raw, "debugTrace", "debugRolls", "debugText")),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def normalize(
    raw: Any,
    fallback_faction: Optional[str] = None,
    fallback_table_id: Optional[str] = None,
) -> Result:
    """
    Convert any supported result shape into a canonical Result.

    Idempotent: normalize(normalize(x)) == normalize(x).

    Args:
        raw: Result, canonical dict or legacy dict
        fallback_faction: Used when the result names no faction
        fallback_table_id: Used when no table id is found anywhere

    Returns:
        Canonical Result (possibly invalid; see validate())
    """
    if isinstance(raw, Result):
        if raw.table and raw.faction:
            return raw
        return Result(
            table=raw.table or fallback_table_id or "",
            faction=raw.faction or fallback_faction or "",
            flights=raw.flights,
            raid_type=raw.raid_type,
            display_text=raw.display_text,
            debug_trace=raw.debug_trace,
        )

    if not isinstance(raw, Mapping):
        logger.warning(f"Cannot normalize {type(raw).__name__}; returning empty result")
        return Result(table=fallback_table_id or "", faction=fallback_faction or "", flights=())

    flights = _list_field(raw, "flights")
    taskings = _list_field(raw, "taskings", "taskingResults")
    flight_results = _list_field(raw, "flightResults")

    table = _find_table(raw, (flights, taskings, flight_results), fallback_table_id)

    # 1. Already canonical
    if flights and raw.get("table") and raw.get("faction"):
        return _envelope(raw, flights, table, fallback_faction)

    # 2. Per-tasking entries
    if taskings:
        return _envelope(raw, taskings, table, fallback_faction)

    # 3. flights[] / flightResults[] without full meta
    nested = flights or flight_results
    if nested:
        return _envelope(raw, nested, table, fallback_faction)

    # 4. Flat single flight
    return _envelope(raw, [raw], table, fallback_faction)
