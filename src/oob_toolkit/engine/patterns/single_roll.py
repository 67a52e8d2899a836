"""
Module: engine.patterns.single_roll

Purpose:
    One draw against one aircraft table with a fixed nation (no nation
    step). Used by special-mission tables keyed only by mission type.

Key Classes:
    - SingleRollProcessor
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

from oob_toolkit.core.models.definitions import AircraftLeaf
from oob_toolkit.core.models.flights import FlightRecord

from ..config import ResolutionPattern
from ..dice import RandomDraw
from .base import TableProcessor, iter_leaves


class SingleRollProcessor(TableProcessor):
    pattern = ResolutionPattern.SINGLE_ROLL

    def _check_topology(self) -> None:
        if len(self.definition.slots) != 1:
            raise self._config_error("expects exactly one tasking slot")
        for leaf in iter_leaves(self.definition.slots[0].source):
            if not isinstance(leaf, AircraftLeaf) or not leaf.nation:
                raise self._config_error("every leaf must be an aircraft table with a fixed nation")

    def _resolve(
        self,
        params: Mapping[str, Any],
        draw: RandomDraw,
    ) -> Tuple[List[FlightRecord], Optional[str]]:
        slot = self.definition.slots[0]
        return self.resolve_slot(slot, params, draw), self.definition.raid_type
