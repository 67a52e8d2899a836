"""
Module: engine.resolution.ordnance

Purpose:
    Per-flight ordnance availability. A base d10 is adjusted by an
    aircraft-family modifier, clamped to 10 and mapped through the
    nationality's tier table; SEAD flights always add anti-radiation
    missiles after the tier lookup.

Key Functions:
    - family_modifier(): Additive modifier for an aircraft type
    - modified_roll(): Base roll plus modifier, clamped
    - restriction_for(): Fixed text for restricted (nationality, family) pairs

Key Classes:
    - OrdnanceResolver: Tier lookup bound to one table's tier tables

Algorithm:
    1. Restricted pair -> fixed description, no draw consumed
    2. Draw base roll
    3. Add first-matching family modifier (0, +1, +2), clamp to 10
    4. Look up the nationality's tier table (fallback "*")
    5. SEAD -> append " + ARM"

    A tasking with its own ordnance table skips steps 3-5 and looks the
    base roll up directly.

Dependencies:
    - core.models.ranges: RangeTable tiers
    - engine.dice: RandomDraw

Used By:
    - engine.resolution.records: Ordnance-rolling taskings
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from oob_toolkit.core.errors import DataError, ErrorKind
from oob_toolkit.core.models.ranges import RangeTable

from ..dice import RandomDraw

logger = logging.getLogger(__name__)


MAX_ROLL = 10
SEAD_TASKING = "SEAD"
SEAD_SUFFIX = " + ARM"
FALLBACK_TIER = "*"

# First matching substring wins
AIRCRAFT_FAMILY_MODIFIERS: Tuple[Tuple[str, int], ...] = (
    # NATO
    ("F-16", 2),
    ("A-10", 2),
    ("Tornado GR1", 1),
    ("Tornado IDS", 1),
    ("CF-18", 1),
    ("F/A-18", 1),
    # Warsaw Pact
    ("Su-24", 2),
    ("Su-17M4", 1),
    ("MiG-27K", 1),
)

# Note E: GDR and POL MiG-21 variants carry only bombs, AT CBU or rockets
NOTE_E_ORDNANCE = "Bombs/CBU/Rockets (Note E: Only Bombs, AT CBU, or Rockets)"

ORDNANCE_RESTRICTIONS: Dict[Tuple[str, str], str] = {
    ("GDR", "MiG-21"): NOTE_E_ORDNANCE,
    ("POL", "MiG-21"): NOTE_E_ORDNANCE,
}


def family_modifier(aircraft_type: str) -> int:
    for family, modifier in AIRCRAFT_FAMILY_MODIFIERS:
        if family in aircraft_type:
            return modifier
    return 0


def modified_roll(base_roll: int, aircraft_type: str) -> int:
    """
    Apply the family modifier and clamp.

    Example:
        >>> modified_roll(9, "F-16C")
        10
        >>> modified_roll(3, "F-4E")
        3
    """
    return min(base_roll + family_modifier(aircraft_type), MAX_ROLL)


def restriction_for(nationality: str, aircraft_type: str) -> Optional[str]:
    for (restricted_nationality, family), text in ORDNANCE_RESTRICTIONS.items():
        if nationality == restricted_nationality and family in aircraft_type:
            return text
    return None


class OrdnanceResolver:
    """
    Resolves ordnance descriptions against one table's tier tables.

    Attributes:
        tiers: Nationality (or "*") -> tier RangeTable
        table_id: Owning table, for error messages
    """

    def __init__(self, tiers: Mapping[str, RangeTable[str]], table_id: Optional[str] = None):
        self.tiers = tiers
        self.table_id = table_id

    def tier_table(self, nationality: str) -> RangeTable[str]:
        """
        Raises:
            DataError: If neither the nationality nor the fallback has tiers
        """
        table = self.tiers.get(nationality) or self.tiers.get(FALLBACK_TIER)
        if table is None:
            raise DataError(
                f"No ordnance tiers for nationality {nationality}",
                kind=ErrorKind.NATIONALITY,
                table=self.table_id,
            )
        return table

    def describe(self, base_roll: int, aircraft_type: str, tasking: str, nationality: str) -> str:
        """Pure mapping from a base roll to the ordnance description."""
        restricted = restriction_for(nationality, aircraft_type)
        if restricted is not None:
            return restricted
        description = self.tier_table(nationality).lookup(modified_roll(base_roll, aircraft_type))
        if tasking == SEAD_TASKING:
            description += SEAD_SUFFIX
        return description

    def resolve(
        self,
        draw: RandomDraw,
        aircraft_type: str,
        tasking: str,
        nationality: str,
        label: str,
        table: Optional[RangeTable[str]] = None,
    ) -> str:
        """
        Roll one flight's ordnance.

        Args:
            table: Tasking-specific ordnance table; when given, the roll is
                looked up as-is with no family modifier and no SEAD suffix
        """
        restricted = restriction_for(nationality, aircraft_type)
        if restricted is not None:
            logger.debug(f"{label}: restricted for {nationality} {aircraft_type}, no roll")
            return restricted
        base_roll = draw.roll(label)
        if table is not None:
            return table.lookup(base_roll)
        return self.describe(base_roll, aircraft_type, tasking, nationality)

    def resolve_flights(
        self,
        draw: RandomDraw,
        aircraft_type: str,
        tasking: str,
        nationality: str,
        count: int,
        label_prefix: str,
        table: Optional[RangeTable[str]] = None,
        first_flight: int = 1,
    ) -> Tuple[str, ...]:
        """Roll ordnance independently for each of ``count`` flights."""
        return tuple(
            self.resolve(draw, aircraft_type, tasking, nationality, f"{label_prefix} Flight {i} Ordnance", table)
            for i in range(first_flight, first_flight + count)
        )
