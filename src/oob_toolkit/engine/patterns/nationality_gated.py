"""
Module: engine.patterns.nationality_gated

Purpose:
    One upfront choice of sub-faction ("nationality") gates which tasking
    set is used; the rest behaves like the multi-tasking pattern under
    that nationality.

Key Classes:
    - NationalityGatedProcessor

Algorithm:
    1. Nationality from the caller parameter (after alias mapping), or
       from one draw against the nationality table
    2. Resolve that nationality's slots in order
    3. Ordnance tiers and restrictions are keyed by the nationality

Used By:
    - Raid and combat-rescue tables (E, I, K)
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

from oob_toolkit.core.errors import ErrorKind
from oob_toolkit.core.models.flights import FlightRecord

from ..config import ResolutionPattern
from ..dice import RandomDraw
from .base import TableProcessor

logger = logging.getLogger(__name__)


class NationalityGatedProcessor(TableProcessor):
    pattern = ResolutionPattern.NATIONALITY_GATED

    def _check_topology(self) -> None:
        definition = self.definition
        if not definition.nationalities:
            raise self._config_error("has no nationality tasking sets")
        if definition.nationality_roll is None and not definition.nationality_param:
            raise self._config_error("needs a nationality roll or a nationality parameter")
        if any(s.needs_tiers for s in definition.all_slots()) and not definition.ordnance_tiers:
            raise self._config_error("ordnance taskings need ordnance tiers")

    def choose_nationality(self, params: Mapping[str, Any], draw: RandomDraw) -> Tuple[str, Optional[str]]:
        """
        Returns:
            (package key, requested nationality if an alias changed it)

        Raises:
            DataError: Missing parameter or unknown nationality
        """
        definition = self.definition
        if definition.nationality_param:
            requested = params.get(definition.nationality_param)
            if not requested:
                raise self._error(
                    f"Missing parameter {definition.nationality_param!r}", ErrorKind.PARAMETER
                )
            key = definition.nationality_aliases.get(requested, requested)
            actual = requested if key != requested else None
        else:
            key = definition.nationality_roll.lookup(draw.roll("Nationality"))
            actual = None

        if key not in definition.nationalities:
            raise self._error(f"Unknown nationality {key}", ErrorKind.NATIONALITY)
        return key, actual

    def _resolve(
        self,
        params: Mapping[str, Any],
        draw: RandomDraw,
    ) -> Tuple[List[FlightRecord], Optional[str]]:
        key, actual = self.choose_nationality(params, draw)
        gated = self.definition.nationalities[key]
        logger.debug(f"Table {self.table_id}: nationality {key}" + (f" (requested {actual})" if actual else ""))
        flights = self.resolve_slots(
            gated.slots,
            params,
            draw,
            nationality=key,
            actual_nationality=actual,
        )
        return flights, gated.raid_type or self.definition.raid_type
