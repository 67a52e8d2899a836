"""
Module: engine.controller

Purpose:
    Public entry points of the resolution engine.
    Registry -> Process -> Normalize -> Notes -> Validate

Key Functions:
    - resolve(): Resolve one table into a Result (or DomainError)
    - resolve_checked(): resolve() plus the contract violations found
    - get_available_tables(): Known table ids, optionally per module

Key Classes:
    - ResolutionReport: Result together with its violations

Dependencies:
    - engine.registry: Processor lookup
    - engine.dice: RandomDraw per call
    - engine.contract: normalize / validate

Used By:
    - oob_toolkit (package facade)
    - Card layout / UI collaborators (external)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from oob_toolkit.core.errors import ErrorKind
from oob_toolkit.core.models.flights import DomainError, FlightRecord, Result

from .contract import normalize, validate
from .dice import RandomDraw, RandomSource
from .registry import ProcessorRegistry, get_registry

logger = logging.getLogger(__name__)

# (flight, context) -> note strings to attach, or None
NoteRules = Callable[[FlightRecord, Mapping[str, Any]], Optional[Iterable[str]]]


@dataclass(frozen=True)
class ResolutionReport:
    """
    Result of resolve_checked() (immutable).

    Attributes:
        result: Canonical result, or the DomainError returned instead
        violations: Contract violations found by validate()
    """

    result: Union[Result, DomainError]
    violations: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Result) and not self.violations


def _apply_note_rules(result: Result, note_rules: NoteRules, context: Mapping[str, Any]) -> Result:
    flights: List[FlightRecord] = []
    for flight in result.flights:
        notes = note_rules(flight, context)
        if notes:
            flight = replace(flight, notes=flight.notes + tuple(notes))
        flights.append(flight)
    return replace(result, flights=tuple(flights))


def resolve_checked(
    table_id: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    rng: Optional[RandomSource] = None,
    trace: Optional[bool] = None,
    registry: Optional[ProcessorRegistry] = None,
    note_rules: Optional[NoteRules] = None,
) -> ResolutionReport:
    """
    Resolve a table and report contract violations alongside the result.

    Pipeline:
    1. Look up the processor (unknown id -> DomainError)
    2. Process with a fresh RandomDraw over ``rng`` (or the registry's RNG)
    3. Normalize into the canonical Result
    4. Attach notes from ``note_rules`` if given
    5. Validate (advisory; violations logged and returned)

    Args:
        table_id: Table to resolve, e.g. "C"
        params: Caller context such as {"scenarioDate": "pre"}
        rng: Random source with randint(a, b); ForcedRolls in tests
        trace: Capture roll traces (defaults to the registry config)
        registry: Registry to use (defaults to the packaged tables)
        note_rules: Note-rules collaborator

    Returns:
        ResolutionReport
    """
    registry = registry or get_registry()
    config = registry.config
    trace = config.trace if trace is None else trace

    processor = registry.get_processor(table_id)
    if processor is None:
        return ResolutionReport(DomainError(ErrorKind.TABLE, f"Unknown table {table_id}", table_id))

    source = rng if rng is not None else registry.random_source()
    draw = RandomDraw(source, trace=trace)

    raw = processor.process(params, draw)
    if isinstance(raw, DomainError):
        return ResolutionReport(raw)

    definition = processor.definition
    result = normalize(raw, definition.faction, table_id)

    if note_rules is not None:
        context = {
            "table": table_id,
            "module": definition.module,
            "faction": definition.faction,
            "params": dict(params or {}),
        }
        result = _apply_note_rules(result, note_rules, context)

    violations = validate(result)
    logger.debug(f"Resolved table {table_id}: {len(result.flights)} records, {len(violations)} violations")
    return ResolutionReport(result, tuple(violations))


def resolve(
    table_id: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    rng: Optional[RandomSource] = None,
    trace: Optional[bool] = None,
    registry: Optional[ProcessorRegistry] = None,
    note_rules: Optional[NoteRules] = None,
) -> Union[Result, DomainError]:
    """
    Resolve one table.

    Example:
        >>> result = resolve("C", {"scenarioDate": "pre", "tasking": "SEAD"},
        ...                  rng=ForcedRolls([1, 5, 3, 7, 2, 9]))
        >>> [f.aircraft_type for f in result.flights]
        ['F-4G', 'F-4E']
    """
    return resolve_checked(
        table_id,
        params,
        rng=rng,
        trace=trace,
        registry=registry,
        note_rules=note_rules,
    ).result


def get_available_tables(
    module: Optional[str] = None,
    *,
    registry: Optional[ProcessorRegistry] = None,
) -> List[str]:
    return (registry or get_registry()).get_available_tables(module)
