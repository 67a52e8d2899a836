"""
Module: engine.patterns.multi_tasking

Purpose:
    Raid tables: a fixed, ordered list of taskings, each resolved
    independently (nation-then-aircraft or nation-fixed aircraft draw) and
    concatenated. Ordnance taskings roll once per generated flight.

Key Classes:
    - MultiTaskingProcessor

Used By:
    - Raid tables (C, D, J)
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from oob_toolkit.core.models.flights import FlightRecord

from ..config import ResolutionPattern
from ..dice import RandomDraw
from .base import TableProcessor

logger = logging.getLogger(__name__)


class MultiTaskingProcessor(TableProcessor):
    pattern = ResolutionPattern.MULTI_TASKING

    def _check_topology(self) -> None:
        if not self.definition.slots:
            raise self._config_error("has no tasking slots")
        if any(s.needs_tiers for s in self.definition.slots) and not self.definition.ordnance_tiers:
            raise self._config_error("ordnance taskings need ordnance tiers")

    def _resolve(
        self,
        params: Mapping[str, Any],
        draw: RandomDraw,
    ) -> Tuple[List[FlightRecord], Optional[str]]:
        flights = self.resolve_slots(self.definition.slots, params, draw)
        logger.debug(f"Table {self.table_id}: {len(flights)} flight records")
        return flights, self.definition.raid_type
