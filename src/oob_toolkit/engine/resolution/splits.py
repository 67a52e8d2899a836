"""
Module: engine.resolution.splits

Purpose:
    Expand a SplitEntry ("two SEAD flights are F-4G and the other two are
    F-4E") into two separate FlightRecords, each with its own ordnance
    rolls. The joined name never reaches the output.

Key Functions:
    - divide_flights(): Split a flight count between the two members

Key Classes:
    - SplitResolver

Dependencies:
    - engine.resolution.records: emit_group

Used By:
    - engine.patterns.base
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Mapping, Optional, Tuple

from oob_toolkit.core.models.catalog import SplitEntry
from oob_toolkit.core.models.flights import FlightRecord

from ..dice import RandomDraw
from .ordnance import OrdnanceResolver
from .records import GroupContext, emit_group


def divide_flights(total: int) -> Tuple[int, int]:
    """
    Odd counts give the extra flight to the first member.

    Example:
        >>> divide_flights(4)
        (2, 2)
        >>> divide_flights(3)
        (2, 1)
    """
    second = total // 2
    return total - second, second


class SplitResolver:
    """Emits one FlightRecord per split member with a non-zero share."""

    def __init__(self, ordnance: Optional[OrdnanceResolver] = None):
        self.ordnance = ordnance

    def expand(
        self,
        entry: SplitEntry,
        context: GroupContext,
        flight_count: int,
        draw: RandomDraw,
        *,
        resolve: Mapping[str, str] | None = None,
        trace_mark: Optional[int] = None,
    ) -> List[FlightRecord]:
        """
        Args:
            entry: Split to expand
            context: Shared group attributes
            flight_count: Total flights for the tasking
            draw: Draw source for per-member ordnance rolls
            resolve: Composite-row nationality overrides per aircraft name
            trace_mark: Trace position where the tasking began; the first
                record carries the nation and aircraft rolls from there

        Returns:
            Records in member order; their flight counts sum to flight_count
        """
        records: List[FlightRecord] = []
        counts = divide_flights(flight_count)
        for member, count in zip((entry.first, entry.second), counts):
            if count == 0:
                continue
            member_context = context
            if resolve and member.name in resolve:
                member_context = replace(context, nationality=resolve[member.name])
            mark = draw.mark() if trace_mark is None else trace_mark
            trace_mark = None
            records.append(
                emit_group(
                    member_context,
                    member,
                    count,
                    draw,
                    self.ordnance,
                    trace_mark=mark,
                    label_prefix=f"{context.tasking} {member.name}",
                )
            )
        return records
