"""
Module: engine.resolution.variants

Purpose:
    Resolve VariantEntry rows ("Roll again. 1-5 F-4D; 6-10 F-4E") with one
    extra draw against the entry's sub-table.

Key Classes:
    - VariantResolver

Dependencies:
    - core.models.catalog
    - engine.dice: RandomDraw

Used By:
    - engine.patterns.base: Aircraft resolution for every pattern
"""

from __future__ import annotations

import logging

from oob_toolkit.core.models.catalog import CatalogEntry, EntryKind, VariantEntry

from ..dice import RandomDraw

logger = logging.getLogger(__name__)


class VariantResolver:
    """
    Turns variant entries into concrete ones.

    Same roll + same entry always yields the same result; nested variants
    take one further draw per level.
    """

    @staticmethod
    def resolve_roll(entry: VariantEntry, roll: int) -> CatalogEntry:
        return entry.sub_table.lookup(roll)

    def resolve(self, entry: CatalogEntry, draw: RandomDraw, label: str) -> CatalogEntry:
        """
        Args:
            entry: Any catalog entry; non-variants are returned unchanged
            draw: Draw source for the sub-roll(s)
            label: Trace label, e.g. "Bombing Sub-roll"

        Returns:
            First non-variant entry reached
        """
        current = entry
        while current.kind is EntryKind.VARIANT:
            roll = draw.roll(label)
            resolved = self.resolve_roll(current, roll)
            logger.debug(f"{label}: {current.name} -> {resolved.name}")
            current = resolved
        return current
