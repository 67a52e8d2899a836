"""
Module: engine.patterns.base

Purpose:
    Shared machinery for every resolution pattern: parameter branch
    selection, the nation -> aircraft -> variant -> split/ordnance chain
    for one tasking slot, and conversion of DataError into DomainError at
    the process() boundary.

Key Classes:
    - TableProcessor: Abstract base for the pattern strategies

Dependencies:
    - core.models: Definitions, catalog entries, results
    - engine.resolution: Variant, split and ordnance resolvers
    - engine.dice: RandomDraw

Used By:
    - engine.patterns.*: Concrete strategies
    - engine.registry: Processor construction

Design Deviation from Legacy Processors:
    Legacy code had one near-duplicate processor class per table. Here
    four generic strategies walk declarative TableDefinitions; the only
    per-table knowledge is the pattern chosen in engine.config.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, ClassVar, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from oob_toolkit.core.errors import ConfigurationError, DataError, ErrorKind
from oob_toolkit.core.models.catalog import CatalogEntry, EntryKind
from oob_toolkit.core.models.definitions import (
    AircraftLeaf,
    BranchNode,
    NationsLeaf,
    SlotDefinition,
    SourceNode,
    TableDefinition,
)
from oob_toolkit.core.models.flights import DomainError, FlightRecord, Result

from ..config import ResolutionPattern
from ..dice import RandomDraw
from ..resolution import GroupContext, OrdnanceResolver, SplitResolver, VariantResolver, emit_group

logger = logging.getLogger(__name__)

Leaf = Union[NationsLeaf, AircraftLeaf]
TASKING_PARAM = "tasking"


def iter_leaves(node: SourceNode) -> Iterator[Leaf]:
    """Yield every leaf below a source node."""
    if isinstance(node, BranchNode):
        for child in node.options.values():
            yield from iter_leaves(child)
    else:
        yield node


class TableProcessor(ABC):
    """
    Base class for resolution strategies.

    Subclasses implement ``_resolve()`` and may raise DataError freely;
    ``process()`` turns it into a DomainError value.

    Attributes:
        definition: Read-only table definition
        variants: Sub-roll resolver
        ordnance: Tier resolver bound to the table's ordnance tiers
        splits: Split expander sharing the ordnance resolver
    """

    pattern: ClassVar[ResolutionPattern]

    def __init__(self, definition: Optional[TableDefinition]):
        if definition is None:
            raise ConfigurationError(f"{type(self).__name__} requires a table definition")
        self.definition = definition
        self.variants = VariantResolver()
        self.ordnance = OrdnanceResolver(definition.ordnance_tiers, definition.table_id)
        self.splits = SplitResolver(self.ordnance)
        self._check_topology()

    @property
    def table_id(self) -> str:
        return self.definition.table_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table_id={self.table_id!r})"

    # ─────────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────────

    def process(
        self,
        params: Optional[Mapping[str, Any]],
        draw: RandomDraw,
    ) -> Union[Result, DomainError]:
        """
        Resolve the table once.

        Args:
            params: Caller context (scenarioDate, atafZone, tasking, ...)
            draw: Draw source for this resolution only

        Returns:
            Result, or DomainError for missing / malformed table data
        """
        params = dict(params or {})
        try:
            flights, raid_type = self._resolve(params, draw)
        except DataError as e:
            logger.warning(f"Table {self.table_id}: {e.message}")
            return DomainError(kind=e.kind, message=e.message, table=self.table_id)

        return Result(
            table=self.table_id,
            faction=self.definition.faction,
            flights=tuple(flights),
            raid_type=raid_type,
            display_text="\n".join(f.display_text for f in flights),
            debug_trace=draw.trace,
        )

    @abstractmethod
    def _resolve(
        self,
        params: Mapping[str, Any],
        draw: RandomDraw,
    ) -> Tuple[List[FlightRecord], Optional[str]]:
        """Return the emitted flights and the raid type."""

    def _check_topology(self) -> None:
        """Reject definitions this pattern cannot resolve."""

    # ─────────────────────────────────────────────────────────────────────────
    # Shared Steps
    # ─────────────────────────────────────────────────────────────────────────

    def _error(self, message: str, kind: ErrorKind) -> DataError:
        return DataError(message, kind=kind, table=self.table_id)

    def _config_error(self, message: str) -> ConfigurationError:
        return ConfigurationError(f"Table {self.table_id} ({self.pattern.value}): {message}")

    def select_leaf(self, node: SourceNode, params: Mapping[str, Any]) -> Leaf:
        """
        Follow parameter branches down to a leaf.

        Raises:
            DataError: If a branch parameter is missing or has no option
        """
        while isinstance(node, BranchNode):
            if node.param not in params or params[node.param] in (None, ""):
                raise self._error(f"Missing parameter {node.param!r}", ErrorKind.PARAMETER)
            value = str(params[node.param])
            key = node.option_key(value)
            if key is None:
                raise self._error(
                    f"Unknown {node.param} {value!r} (expected one of {sorted(node.options)})",
                    ErrorKind.VARIANT,
                )
            node = node.options[key]
        return node

    def select_slots(
        self,
        slots: Sequence[SlotDefinition],
        params: Mapping[str, Any],
    ) -> Sequence[SlotDefinition]:
        """
        Restrict to one tasking when ``params["tasking"]`` is given.

        Raises:
            DataError: If the requested tasking is not part of the table
        """
        requested = params.get(TASKING_PARAM)
        if not requested:
            return slots
        chosen = [s for s in slots if s.tasking == requested]
        if not chosen:
            raise self._error(f"Unknown tasking {requested!r}", ErrorKind.TASKING)
        return chosen

    def resolve_slot(
        self,
        slot: SlotDefinition,
        params: Mapping[str, Any],
        draw: RandomDraw,
        *,
        nationality: Optional[str] = None,
        actual_nationality: Optional[str] = None,
    ) -> List[FlightRecord]:
        """
        Resolve one tasking slot into one record, or two for a split.

        Steps:
        1. Select the leaf via parameter branches
        2. Nation draw (nations leaf) or fixed / gating nation
        3. Aircraft draw, then variant sub-rolls
        4. Split expansion or a single group, with ordnance if configured

        Slots rolling aircraft per flight repeat steps 3-4 for every
        flight, emitting one single-flight record each.

        Args:
            slot: Tasking slot to resolve
            params: Caller parameters for branch selection
            draw: Draw source
            nationality: Gating nationality (gated tables only)
            actual_nationality: Requested crew nationality when aliased
        """
        mark = draw.mark()
        leaf = self.select_leaf(slot.source, params)
        tasking = leaf.overrides.tasking or slot.tasking
        flight_size = leaf.overrides.flight_size or slot.flight_size
        flight_count = leaf.overrides.flight_count or slot.flight_count

        if isinstance(leaf, NationsLeaf):
            nation = leaf.nations.lookup(draw.roll(f"{tasking} Nation"))
            nation_name = nation.name
            aircraft_table = nation.aircraft
            resolve = nation.resolve
        else:
            nation_name = leaf.nation or nationality
            if not nation_name:
                raise self._error(f"No nation for tasking {tasking!r}", ErrorKind.NATION)
            aircraft_table = leaf.aircraft
            resolve = {}

        context = GroupContext(
            table_id=self.table_id,
            nationality=nation_name,
            tasking=tasking,
            flight_size=flight_size,
            rolls_ordnance=slot.rolls_ordnance,
            ordnance_nationality=nationality,
            actual_nationality=actual_nationality,
            ordnance_table=slot.ordnance_rolls,
        )

        if not slot.aircraft_per_flight:
            entry = aircraft_table.lookup(draw.roll(f"{tasking} Aircraft"))
            entry = self.variants.resolve(entry, draw, f"{tasking} Sub-roll")
            return self._emit(entry, context, flight_count, draw, resolve, mark)

        records: List[FlightRecord] = []
        for i in range(1, flight_count + 1):
            flight = f"{tasking} Flight {i}"
            entry = aircraft_table.lookup(draw.roll(f"{flight} Aircraft"))
            entry = self.variants.resolve(entry, draw, f"{flight} Sub-roll")
            records.extend(self._emit(entry, context, 1, draw, resolve, mark, first_flight=i))
            mark = draw.mark()
        return records

    def _emit(
        self,
        entry: CatalogEntry,
        context: GroupContext,
        flight_count: int,
        draw: RandomDraw,
        resolve: Mapping[str, str],
        mark: int,
        first_flight: int = 1,
    ) -> List[FlightRecord]:
        if entry.kind is EntryKind.SPLIT:
            return self.splits.expand(entry, context, flight_count, draw, resolve=resolve, trace_mark=mark)

        if entry.name in resolve:
            context = replace(context, nationality=resolve[entry.name])
        return [
            emit_group(
                context,
                entry,
                flight_count,
                draw,
                self.ordnance,
                trace_mark=mark,
                first_flight=first_flight,
            )
        ]

    def resolve_slots(
        self,
        slots: Sequence[SlotDefinition],
        params: Mapping[str, Any],
        draw: RandomDraw,
        **kwargs: Any,
    ) -> List[FlightRecord]:
        flights: List[FlightRecord] = []
        for slot in self.select_slots(slots, params):
            flights.extend(self.resolve_slot(slot, params, draw, **kwargs))
        return flights
