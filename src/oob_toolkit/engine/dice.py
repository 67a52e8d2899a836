"""
Module: engine.dice

Purpose:
    Uniform die draws with optional roll tracing. The random source is
    injected so tests can replay an exact roll sequence.

Key Classes:
    - RandomDraw: Per-resolution draw helper with trace capture
    - ForcedRolls: Source replaying a fixed sequence of rolls
    - RollSequenceExhausted: Raised when a forced sequence runs dry

Dependencies:
    - random (std)
    - collections (std)

Used By:
    - engine.patterns: All nation / aircraft / sub-roll draws
    - engine.resolution.ordnance: Per-flight ordnance draws
    - engine.controller: Builds one RandomDraw per resolve() call
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Iterable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        ...


class RollSequenceExhausted(RuntimeError):
    """A ForcedRolls source was asked for more rolls than it holds."""
    pass


class ForcedRolls:
    """
    Random source that replays a fixed sequence.

    Example:
        >>> draw = RandomDraw(ForcedRolls([3, 7]))
        >>> draw.roll("Nation"), draw.roll("Aircraft")
        (3, 7)
    """

    def __init__(self, rolls: Iterable[int]):
        self._rolls = deque(rolls)
        self._consumed = 0

    def randint(self, a: int, b: int) -> int:
        if not self._rolls:
            raise RollSequenceExhausted(f"Forced roll sequence exhausted after {self._consumed} rolls")
        roll = self._rolls.popleft()
        if not a <= roll <= b:
            raise ValueError(f"Forced roll {roll} outside [{a}, {b}]")
        self._consumed += 1
        return roll

    @property
    def remaining(self) -> int:
        return len(self._rolls)

    @property
    def consumed(self) -> int:
        return self._consumed


class RandomDraw:
    """
    Draws uniform integers in [1, sides] for one resolution.

    In trace mode every roll appends "label: value" to ``trace``; tracing
    never changes which numbers are drawn.

    Attributes:
        trace_enabled: Whether roll entries are recorded
    """

    def __init__(self, source: Optional[RandomSource] = None, *, trace: bool = False):
        self._source: RandomSource = source if source is not None else random.Random()
        self.trace_enabled = trace
        self._trace: List[str] = []

    def roll(self, label: str, sides: int = 10) -> int:
        value = self._source.randint(1, sides)
        if self.trace_enabled:
            self._trace.append(f"{label}: {value}")
        logger.debug(f"{label}: {value}")
        return value

    @property
    def trace(self) -> Tuple[str, ...]:
        return tuple(self._trace)

    def mark(self) -> int:
        """Position in the trace, for slicing entries produced afterwards."""
        return len(self._trace)

    def since(self, mark: int) -> Tuple[str, ...]:
        return tuple(self._trace[mark:])
