"""
Contract Package

Canonical result normalization and advisory validation.
"""

from .normalizer import flight_from_mapping, normalize, parse_trace
from .validator import validate

__all__ = [
    "flight_from_mapping",
    "normalize",
    "parse_trace",
    "validate",
]
