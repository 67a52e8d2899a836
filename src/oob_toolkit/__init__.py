"""
OOB Toolkit

Randomized order-of-battle air mission generation for the Red Storm
family of tabletop wargames.

Example:
    >>> from oob_toolkit import resolve
    >>> result = resolve("C", {"scenarioDate": "post"})
    >>> print(result.display_text)
"""

__version__ = "2.0.0"

from .core.errors import (
    ConfigurationError,
    DataError,
    DefinitionError,
    ErrorKind,
    LoaderError,
    OOBError,
    RangeLookupError,
)
from .core.models import DomainError, FlightRecord, Result
from .engine import (
    EngineConfig,
    ForcedRolls,
    ProcessorRegistry,
    RandomDraw,
    ResolutionReport,
    RollSequenceExhausted,
    get_available_tables,
    normalize,
    resolve,
    resolve_checked,
    validate,
)

__all__ = [
    "ConfigurationError",
    "DataError",
    "DefinitionError",
    "ErrorKind",
    "LoaderError",
    "OOBError",
    "RangeLookupError",
    "DomainError",
    "FlightRecord",
    "Result",
    "EngineConfig",
    "ForcedRolls",
    "ProcessorRegistry",
    "RandomDraw",
    "ResolutionReport",
    "RollSequenceExhausted",
    "get_available_tables",
    "normalize",
    "resolve",
    "resolve_checked",
    "validate",
]
