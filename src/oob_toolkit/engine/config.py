"""
Module: engine.config

Purpose:
    Engine configuration and the static table-id -> resolution-pattern
    mapping. Immutable configuration with validation on construction.

Key Classes:
    - ResolutionPattern: The generic resolution topologies
    - EngineConfig: Data location and loading / tracing behaviour

Key Constants:
    - TABLE_PATTERNS: Table id -> ResolutionPattern

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - engine.registry: Pattern lookup and processor construction
    - engine.loading.loader: data_dir, strict_ranges, validate_schema
    - engine.controller: trace / seed defaults
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ResolutionPattern(str, Enum):
    """
    Resolution topologies shared by every table.

    Split handling is a branch of NATION_THEN_AIRCRAFT / MULTI_TASKING
    rather than a pattern of its own.
    """

    SINGLE_ROLL = "single_roll"
    NATION_THEN_AIRCRAFT = "nation_then_aircraft"
    MULTI_TASKING = "multi_tasking"
    NATIONALITY_GATED = "nationality_gated"


TABLE_PATTERNS: Dict[str, ResolutionPattern] = {
    # Red Storm - NATO
    "A": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "B": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "C": ResolutionPattern.MULTI_TASKING,
    "D": ResolutionPattern.MULTI_TASKING,
    "E": ResolutionPattern.NATIONALITY_GATED,
    "F": ResolutionPattern.NATION_THEN_AIRCRAFT,
    # Red Storm - Warsaw Pact
    "G": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "H": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "I": ResolutionPattern.NATIONALITY_GATED,
    "J": ResolutionPattern.MULTI_TASKING,
    "K": ResolutionPattern.NATIONALITY_GATED,
    "L": ResolutionPattern.NATION_THEN_AIRCRAFT,
    # Baltic Approaches - NATO
    "A2": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "B2": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "C2": ResolutionPattern.MULTI_TASKING,
    "F2": ResolutionPattern.NATION_THEN_AIRCRAFT,
    # Baltic Approaches - Warsaw Pact
    "G2": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "H2": ResolutionPattern.NATION_THEN_AIRCRAFT,
    "I2": ResolutionPattern.NATIONALITY_GATED,
    "J2": ResolutionPattern.MULTI_TASKING,
    "J3": ResolutionPattern.NATIONALITY_GATED,
    "K2": ResolutionPattern.MULTI_TASKING,
    "L2": ResolutionPattern.SINGLE_ROLL,
}


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for loading table data and resolving tables (immutable).

    Attributes:
        data_dir: Root holding <module>/<faction>-tables.json files
        strict_ranges: Reject definitions whose ranges do not partition the die
        validate_schema: Run JSON Schema validation on every file
        trace: Capture "label: value" roll traces by default
        seed: Seed for the registry's default RNG stream; None draws from
            system entropy on every call

    Example:
        >>> config = EngineConfig(seed=7, trace=True)
        >>> config.data_dir.name
        'data'
    """

    data_dir: Optional[Path] = None
    strict_ranges: bool = True
    validate_schema: bool = True
    trace: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.data_dir is None:
            object.__setattr__(self, "data_dir", DEFAULT_DATA_DIR)
        elif not isinstance(self.data_dir, Path):
            object.__setattr__(self, "data_dir", Path(self.data_dir))
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative: {self.seed}")


def pattern_for(table_id: str) -> Optional[ResolutionPattern]:
    return TABLE_PATTERNS.get(table_id)
