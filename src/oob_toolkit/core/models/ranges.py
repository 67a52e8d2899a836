"""
Module: ranges

Purpose:
    Range-keyed lookup tables. Every OOB table row is addressed by an
    inclusive die range ("1-4", "5", "6-10") and a roll picks the first
    row whose range contains it.

Key Classes:
    - RollRange: Inclusive [low, high] die range
    - RangeTable: Ordered (RollRange, entry) rows with lookup-by-roll

Dependencies:
    - dataclasses (std)
    - core.errors: RangeLookupError

Used By:
    - core.models.catalog: aircraft and variant sub-tables
    - core.models.definitions: nation, nationality and ordnance tiers
    - engine.resolution: every draw resolves through lookup()
    - engine.diagnostics: range widths for fairness checks

Invariants:
    A well-formed table partitions [1, sides] exactly. Gaps and overlaps
    are authoring bugs reported by coverage_problems() and rejected by
    the loader in strict mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Mapping, Tuple, TypeVar

from ..errors import RangeLookupError

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_SIDES = 10


@dataclass(frozen=True, slots=True)
class RollRange:
    """
    Inclusive die range.

    Attributes:
        low: Lowest roll covered (>= 1)
        high: Highest roll covered (>= low)

    Example:
        >>> RollRange.parse("1-4")
        RollRange(low=1, high=4)
        >>> RollRange.parse("7").width
        1
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low < 1:
            raise ValueError(f"Range low must be >= 1: {self.low}")
        if self.high < self.low:
            raise ValueError(f"Range high must be >= low: {self.low}-{self.high}")

    @classmethod
    def parse(cls, key: str) -> RollRange:
        """
        Parse a range key such as "1-4" or "5".

        Raises:
            ValueError: If the key is not one or two integers
        """
        text = str(key).strip()
        parts = text.split("-")
        try:
            if len(parts) == 1:
                value = int(parts[0])
                return cls(value, value)
            if len(parts) == 2:
                return cls(int(parts[0]), int(parts[1]))
        except ValueError:
            pass
        raise ValueError(f"Invalid range key: {key!r}")

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    def contains(self, roll: int) -> bool:
        return self.low <= roll <= self.high

    def __str__(self) -> str:
        if self.low == self.high:
            return str(self.low)
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class RangeTable(Generic[T]):
    """
    Ordered mapping from inclusive die ranges to entries.

    Rows are kept in declaration order; lookup() returns the first row
    containing the roll and never guesses when none does.

    Attributes:
        rows: (RollRange, entry) pairs in declaration order
        label: Human-readable location used in error messages
        sides: Die size the ranges are drawn against
    """

    rows: Tuple[Tuple[RollRange, T], ...]
    label: str = ""
    sides: int = DEFAULT_SIDES

    def __post_init__(self) -> None:
        if self.sides < 1:
            raise ValueError(f"sides must be positive: {self.sides}")
        for roll_range, _ in self.rows:
            if roll_range.high > self.sides:
                raise ValueError(
                    f"Range {roll_range} exceeds d{self.sides} in {self.label or 'table'}"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, T],
        label: str = "",
        sides: int = DEFAULT_SIDES,
    ) -> RangeTable[T]:
        """Build a table from a {"1-4": entry, ...} mapping (insertion order kept)."""
        rows = tuple((RollRange.parse(key), value) for key, value in mapping.items())
        return cls(rows=rows, label=label, sides=sides)

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def row_index(self, roll: int) -> int:
        for index, (roll_range, _) in enumerate(self.rows):
            if roll_range.contains(roll):
                return index
        raise RangeLookupError(roll, self.label)

    def lookup_row(self, roll: int) -> Tuple[RollRange, T]:
        return self.rows[self.row_index(roll)]

    def lookup(self, roll: int) -> T:
        """
        Return the entry of the first row containing ``roll``.

        Raises:
            RangeLookupError: If no row contains the roll
        """
        return self.lookup_row(roll)[1]

    # ─────────────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def ranges(self) -> Tuple[RollRange, ...]:
        return tuple(r for r, _ in self.rows)

    @property
    def entries(self) -> Tuple[T, ...]:
        return tuple(e for _, e in self.rows)

    def __iter__(self) -> Iterator[Tuple[RollRange, T]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def coverage_problems(self) -> List[str]:
        """
        Describe every gap and overlap against [1, sides].

        Returns:
            Empty list when the ranges partition the die exactly
        """
        problems: List[str] = []
        hits = [0] * (self.sides + 1)
        for roll_range, _ in self.rows:
            for roll in range(roll_range.low, min(roll_range.high, self.sides) + 1):
                hits[roll] += 1
        where = self.label or "table"
        for roll in range(1, self.sides + 1):
            if hits[roll] == 0:
                problems.append(f"{where}: roll {roll} not covered")
            elif hits[roll] > 1:
                problems.append(f"{where}: roll {roll} covered {hits[roll]} times")
        return problems

    @property
    def is_partition(self) -> bool:
        return not self.coverage_problems()

    def map(self, fn: Callable[[T], U], label: str | None = None) -> RangeTable[U]:
        """Return a table with the same ranges and transformed entries."""
        return RangeTable(
            rows=tuple((r, fn(e)) for r, e in self.rows),
            label=self.label if label is None else label,
            sides=self.sides,
        )
