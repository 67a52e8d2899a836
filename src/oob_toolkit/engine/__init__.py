"""
Engine Package

Table resolution engine: dice, pattern processors, registry and the
public resolve() facade.
"""

from .config import EngineConfig, ResolutionPattern, TABLE_PATTERNS
from .controller import ResolutionReport, get_available_tables, resolve, resolve_checked
from .contract import normalize, validate
from .dice import ForcedRolls, RandomDraw, RollSequenceExhausted
from .registry import ProcessorRegistry, get_registry

__all__ = [
    "EngineConfig",
    "ResolutionPattern",
    "TABLE_PATTERNS",
    "ResolutionReport",
    "get_available_tables",
    "resolve",
    "resolve_checked",
    "normalize",
    "validate",
    "ForcedRolls",
    "RandomDraw",
    "RollSequenceExhausted",
    "ProcessorRegistry",
    "get_registry",
]
