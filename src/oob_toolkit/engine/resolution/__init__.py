"""
Resolution Package

Building blocks shared by every table pattern: variant sub-rolls, split
expansion, ordnance tiers and record construction.
"""

from .ordnance import OrdnanceResolver, family_modifier, modified_roll, restriction_for
from .records import GroupContext, emit_group, flight_text, group_text
from .splits import SplitResolver, divide_flights
from .variants import VariantResolver

__all__ = [
    "OrdnanceResolver",
    "family_modifier",
    "modified_roll",
    "restriction_for",
    "GroupContext",
    "emit_group",
    "flight_text",
    "group_text",
    "SplitResolver",
    "divide_flights",
    "VariantResolver",
]
