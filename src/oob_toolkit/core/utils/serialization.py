"""
Serialization Utilities

Parses table-definition JSON into core models.

**DESIGN DEVIATION FROM LEGACY DATA:**

Legacy Problem:
- Variant aircraft were marked with trailing superscript glyphs ("F-4²",
  "MiG-23Aı") and resolved by scanning names at roll time
- Split SEAD entries were joined names ("F-4G/F-4E") matched by string
  equality inside individual processors
- Variant sub-tables were hard-coded in processor code

Current Solution:
- `migrate_legacy_entry()` runs once per entry while parsing and returns
  an explicitly tagged SimpleEntry / VariantEntry / SplitEntry
- Known legacy sub-tables live in LEGACY_VARIANT_TABLES and are used only
  when the data does not carry its own `variants`
- Nothing downstream of this module looks at glyphs again
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar

from ..errors import DefinitionError
from ..models.catalog import CatalogEntry, SimpleEntry, SplitEntry, VariantEntry
from ..models.definitions import (
    AircraftLeaf,
    BranchNode,
    NationalityDefinition,
    NationEntry,
    NationsLeaf,
    Overrides,
    SlotDefinition,
    SourceNode,
    TableDefinition,
)
from ..models.ranges import RangeTable

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# Legacy Migration Tables
# ─────────────────────────────────────────────────────────────────────────────

# Trailing markers, longest first so "Aı" wins over a bare glyph
LEGACY_MARKERS: Tuple[str, ...] = ("Aı", "A1", "²", "¹")

# Glyphs that can only be markers; "A1" may also end a real designation
_UNAMBIGUOUS_MARKERS = ("²", "¹")

LEGACY_VARIANT_TABLES: Dict[str, Dict[str, Any]] = {
    "F-4": {
        "1-5": {"name": "F-4D", "aircraftId": "US-F-4D-1"},
        "6-10": {"name": "F-4E", "aircraftId": "US-F-4E-1"},
    },
    "MiG-23": {
        "1-4": "MiG-23M",
        "5-8": "MiG-23MF",
        "9-10": "MiG-23ML",
    },
    "MiG-23MF/ML": {
        "1-5": "MiG-23MF",
        "6-10": "MiG-23ML",
    },
}

LEGACY_SPLIT_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("F-4G", "F-4E"),
    ("F-4G", "F-16C"),
)


def strip_legacy_marker(name: str) -> Tuple[str, Optional[str]]:
    """
    Split a trailing legacy marker off a display name.

    Returns:
        (base_name, marker) with marker None when absent

    Example:
        >>> strip_legacy_marker("F-4²")
        ('F-4', '²')
        >>> strip_legacy_marker("F-15C")
        ('F-15C', None)
    """
    for marker in LEGACY_MARKERS:
        if name.endswith(marker) and len(name) > len(marker):
            return name[: -len(marker)].rstrip(), marker
    return name, None


def migrate_legacy_entry(name: str, aircraft_id: Optional[str] = None, label: str = "") -> CatalogEntry:
    """
    Convert a legacy display name into a tagged catalog entry.

    Args:
        name: Raw name from the data file
        aircraft_id: Catalog id carried alongside the name, if any
        label: Location used in sub-table labels and error messages

    Returns:
        VariantEntry for a recognised marker, SplitEntry for a known joined
        pair, SimpleEntry otherwise

    Raises:
        DefinitionError: If an unambiguous marker names an unknown family
    """
    base, marker = strip_legacy_marker(name)
    if marker is not None:
        variants = LEGACY_VARIANT_TABLES.get(base)
        if variants is not None:
            logger.debug(f"Migrated legacy variant {name!r} -> {base!r} at {label}")
            return VariantEntry(
                name=base,
                sub_table=parse_aircraft_table(variants, f"{label} > {base}"),
            )
        if marker in _UNAMBIGUOUS_MARKERS:
            raise DefinitionError(
                f"Legacy variant marker on {name!r} has no known sub-table",
                path=label,
            )

    if "/" in name:
        first, _, second = name.partition("/")
        if (first, second) in LEGACY_SPLIT_PAIRS:
            logger.debug(f"Migrated legacy split {name!r} at {label}")
            return SplitEntry(SimpleEntry(first), SimpleEntry(second))

    return SimpleEntry(name=name, aircraft_id=aircraft_id)


# ─────────────────────────────────────────────────────────────────────────────
# Entry / Table Parsing
# ─────────────────────────────────────────────────────────────────────────────

def parse_range_table(
    mapping: Mapping[str, Any],
    label: str,
    parse_value: Callable[[Any, str], T],
) -> RangeTable[T]:
    """
    Parse a {"1-4": value, ...} mapping, converting each value.

    Raises:
        DefinitionError: If a key is not a valid range
    """
    try:
        raw = RangeTable.from_mapping(mapping, label=label)
    except ValueError as e:
        raise DefinitionError(f"{label}: {e}", path=label) from e
    return RangeTable(
        rows=tuple((r, parse_value(v, f"{label}[{r}]")) for r, v in raw.rows),
        label=label,
        sides=raw.sides,
    )


def parse_entry(raw: Any, label: str) -> CatalogEntry:
    """
    Parse one aircraft table value.

    Accepted forms:
        "F-15C"                                   -> simple (or migrated legacy)
        {"name": "F-15C", "aircraftId": "..."}     -> simple
        {"name": "F-4", "variants": {...}}         -> variant
        {"split": ["F-4G", "F-4E"]}                -> split
    """
    if isinstance(raw, str):
        return migrate_legacy_entry(raw, label=label)

    if not isinstance(raw, Mapping):
        raise DefinitionError(f"{label}: invalid aircraft entry {raw!r}", path=label)

    if "split" in raw:
        pair = raw["split"]
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise DefinitionError(f"{label}: split must list exactly two aircraft", path=label)
        first, second = (_parse_simple(p, f"{label}.split[{i}]") for i, p in enumerate(pair))
        return SplitEntry(first, second)

    name = raw.get("name")
    if not name:
        raise DefinitionError(f"{label}: aircraft entry missing name", path=label)

    if "variants" in raw:
        base, _ = strip_legacy_marker(name)
        return VariantEntry(
            name=base,
            sub_table=parse_aircraft_table(raw["variants"], f"{label} > {base}"),
        )

    return migrate_legacy_entry(name, raw.get("aircraftId"), label=label)


def _parse_simple(raw: Any, label: str) -> SimpleEntry:
    entry = parse_entry(raw, label)
    if not isinstance(entry, SimpleEntry):
        raise DefinitionError(f"{label}: split members must be plain aircraft", path=label)
    return entry


def parse_aircraft_table(mapping: Mapping[str, Any], label: str) -> RangeTable[CatalogEntry]:
    return parse_range_table(mapping, label, parse_entry)


def _parse_string(raw: Any, label: str) -> str:
    if not isinstance(raw, str) or not raw:
        raise DefinitionError(f"{label}: expected non-empty string, got {raw!r}", path=label)
    return raw


def _parse_nation(raw: Any, label: str) -> NationEntry:
    if not isinstance(raw, Mapping) or "name" not in raw or "aircraft" not in raw:
        raise DefinitionError(f"{label}: nation rows need name and aircraft", path=label)
    name = raw["name"]
    return NationEntry(
        name=name,
        aircraft=parse_aircraft_table(raw["aircraft"], f"{label} {name}"),
        resolve=dict(raw.get("resolve", {})),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Definition Parsing
# ─────────────────────────────────────────────────────────────────────────────

def _parse_overrides(raw: Mapping[str, Any]) -> Overrides:
    return Overrides(
        tasking=raw.get("tasking"),
        flight_size=raw.get("flightSize"),
        flight_count=raw.get("flightCount"),
    )


def parse_source(raw: Any, label: str) -> SourceNode:
    """Parse a slot source node (branch, nations leaf or aircraft leaf)."""
    if not isinstance(raw, Mapping):
        raise DefinitionError(f"{label}: source must be an object", path=label)

    if "select" in raw:
        param = raw["select"]
        options = {
            str(value): parse_source(child, f"{label} {param}={value}")
            for value, child in raw.get("options", {}).items()
        }
        if not options:
            raise DefinitionError(f"{label}: select {param!r} has no options", path=label)
        ordinals = {str(k): v for k, v in raw.get("ordinals", {}).items()}
        return BranchNode(param=param, options=options, ordinals=ordinals)

    if "nations" in raw:
        return NationsLeaf(
            nations=parse_range_table(raw["nations"], f"{label} Nation", _parse_nation),
            overrides=_parse_overrides(raw),
        )

    if "aircraft" in raw:
        nation = raw.get("nation")
        where = f"{label} {nation}" if nation else label
        return AircraftLeaf(
            aircraft=parse_aircraft_table(raw["aircraft"], f"{where} Aircraft"),
            nation=nation,
            overrides=_parse_overrides(raw),
        )

    raise DefinitionError(f"{label}: source needs select, nations or aircraft", path=label)


def parse_slot(raw: Mapping[str, Any], label: str) -> SlotDefinition:
    tasking = raw.get("tasking", "")
    where = f"{label} {tasking}"
    ordnance_rolls = None
    if "ordnanceRolls" in raw:
        ordnance_rolls = parse_range_table(raw["ordnanceRolls"], f"{where} Ordnance", _parse_string)
    try:
        return SlotDefinition(
            tasking=tasking,
            flight_size=raw.get("flightSize", 0),
            flight_count=raw.get("flightCount", 0),
            source=parse_source(raw.get("source"), where),
            rolls_ordnance=bool(raw.get("ordnance", ordnance_rolls is not None)),
            ordnance_rolls=ordnance_rolls,
            aircraft_per_flight=bool(raw.get("aircraftPerFlight", False)),
        )
    except ValueError as e:
        raise DefinitionError(f"{where}: {e}", path=where) from e


def parse_table_definition(
    table_id: str,
    raw: Mapping[str, Any],
    *,
    module: str,
    faction: str,
) -> TableDefinition:
    """
    Build a TableDefinition from one entry of a table file.

    Args:
        table_id: Key of the table in the file's "tables" object
        raw: Table JSON object
        module: Module id of the enclosing file
        faction: Faction of the enclosing file

    Raises:
        DefinitionError: If the data cannot be parsed
    """
    label = f"Table {table_id}"

    slots = tuple(parse_slot(s, label) for s in raw.get("taskings", ()))

    nationality_roll = None
    if "nationalityRoll" in raw:
        nationality_roll = parse_range_table(raw["nationalityRoll"], f"{label} Nationality", _parse_string)

    nationalities = {
        key: NationalityDefinition(
            name=key,
            slots=tuple(parse_slot(s, f"{label} {key}") for s in value.get("taskings", ())),
            raid_type=value.get("raidType"),
        )
        for key, value in raw.get("nationalities", {}).items()
    }

    ordnance_tiers = {
        nationality: parse_range_table(tiers, f"{label} Ordnance {nationality}", _parse_string)
        for nationality, tiers in raw.get("ordnance", {}).get("tiers", {}).items()
    }

    try:
        return TableDefinition(
            table_id=table_id,
            name=raw.get("name", table_id),
            faction=faction,
            module=module,
            slots=slots,
            raid_type=raw.get("raidType"),
            nationality_roll=nationality_roll,
            nationality_param=raw.get("nationalityParam"),
            nationality_aliases=dict(raw.get("nationalityAliases", {})),
            nationalities=nationalities,
            ordnance_tiers=ordnance_tiers,
            pattern=raw.get("pattern"),
        )
    except ValueError as e:
        raise DefinitionError(f"{label}: {e}", path=table_id) from e


def parse_table_file(data: Mapping[str, Any]) -> Dict[str, TableDefinition]:
    """
    Parse every table of a validated table file.

    Returns:
        Table id -> TableDefinition, in file order
    """
    module = data["module"]
    faction = data["faction"]
    return {
        table_id: parse_table_definition(table_id, raw, module=module, faction=faction)
        for table_id, raw in data["tables"].items()
    }
