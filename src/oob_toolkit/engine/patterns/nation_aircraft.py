"""
Module: engine.patterns.nation_aircraft

Purpose:
    Nation draw, then an aircraft draw scoped to that nation. Variant
    entries take a sub-roll; split entries divide the flights.

Key Classes:
    - NationThenAircraftProcessor

Used By:
    - QRA / CAP / special-mission tables (A, B, F, G, H, L)
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from oob_toolkit.core.models.definitions import NationsLeaf
from oob_toolkit.core.models.flights import FlightRecord

from ..config import ResolutionPattern
from ..dice import RandomDraw
from .base import TableProcessor, iter_leaves


class NationThenAircraftProcessor(TableProcessor):
    """
    Single-slot, two-roll resolution.

    Example:
        >>> processor = NationThenAircraftProcessor(definition)
        >>> result = processor.process({}, RandomDraw(ForcedRolls([2, 5])))
    """

    pattern = ResolutionPattern.NATION_THEN_AIRCRAFT

    def _check_topology(self) -> None:
        if len(self.definition.slots) != 1:
            raise self._config_error("expects exactly one tasking slot")
        for leaf in iter_leaves(self.definition.slots[0].source):
            if not isinstance(leaf, NationsLeaf):
                raise self._config_error("every leaf must start with a nation table")

    def _resolve(
        self,
        params: Mapping[str, Any],
        draw: RandomDraw,
    ) -> Tuple[List[FlightRecord], Optional[str]]:
        flights = self.resolve_slot(self.definition.slots[0], params, draw)
        return flights, self.definition.raid_type
