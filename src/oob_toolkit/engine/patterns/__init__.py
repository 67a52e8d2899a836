"""
Patterns Package

Generic resolution strategies selected per table id by
engine.config.TABLE_PATTERNS.
"""

from typing import Dict, Type

from ..config import ResolutionPattern
from .base import TableProcessor
from .multi_tasking import MultiTaskingProcessor
from .nation_aircraft import NationThenAircraftProcessor
from .nationality_gated import NationalityGatedProcessor
from .single_roll import SingleRollProcessor

PROCESSOR_CLASSES: Dict[ResolutionPattern, Type[TableProcessor]] = {
    ResolutionPattern.SINGLE_ROLL: SingleRollProcessor,
    ResolutionPattern.NATION_THEN_AIRCRAFT: NationThenAircraftProcessor,
    ResolutionPattern.MULTI_TASKING: MultiTaskingProcessor,
    ResolutionPattern.NATIONALITY_GATED: NationalityGatedProcessor,
}

__all__ = [
    "PROCESSOR_CLASSES",
    "TableProcessor",
    "MultiTaskingProcessor",
    "NationThenAircraftProcessor",
    "NationalityGatedProcessor",
    "SingleRollProcessor",
]
