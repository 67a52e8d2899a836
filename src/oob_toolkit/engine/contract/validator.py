"""
Module: engine.contract.validator

Purpose:
    Advisory invariant checks on canonical results. Violations are
    returned and logged; the result is never modified or rejected.

Key Functions:
    - validate(): Result or canonical dict -> list of violation strings

Checks:
    - table non-empty
    - faction is "NATO" or "WP"
    - flights non-empty
    - per flight: aircraftType / nationality / tasking non-empty,
      flightSize > 0, flightCount > 0

Dependencies:
    - core.models.flights

Used By:
    - engine.controller: After normalize() in resolve()
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from oob_toolkit.core.models.flights import FACTIONS, FlightRecord, Result

logger = logging.getLogger(__name__)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _flight_fields(flight: Any) -> Mapping[str, Any]:
    if isinstance(flight, FlightRecord):
        return flight.to_dict()
    if isinstance(flight, Mapping):
        return flight
    return {}


def validate(result: Any, context: Optional[str] = None) -> List[str]:
    """
    Check a canonical result.

    Args:
        result: Result instance or canonical camelCase dict
        context: Label for messages (defaults to "Table <id>")

    Returns:
        Violation messages; empty means valid

    Example:
        >>> validate(resolve("G", rng=ForcedRolls([1, 1])))
        []
    """
    if isinstance(result, Result):
        fields = result.to_dict()
    elif isinstance(result, Mapping):
        fields = result
    else:
        label = context or "unknown"
        errors = [f"{label}: result is not an object"]
        logger.warning(errors[0])
        return errors

    table = fields.get("table")
    prefix = f"{context or (f'Table {table}' if table else 'unknown')}: "
    errors: List[str] = []

    if not table:
        errors.append(prefix + 'missing "table"')

    faction = fields.get("faction")
    if faction not in FACTIONS:
        errors.append(prefix + f'faction must be "NATO" or "WP", got {faction!r}')

    flights = fields.get("flights")
    if not isinstance(flights, (list, tuple)) or not flights:
        errors.append(prefix + "flights must be a non-empty array")
    else:
        for i, flight in enumerate(flights):
            f = _flight_fields(flight)
            f_prefix = prefix + f"flights[{i}]: "
            if not f.get("aircraftType"):
                errors.append(f_prefix + "missing aircraftType")
            if not f.get("nationality"):
                errors.append(f_prefix + "missing nationality")
            if not f.get("tasking"):
                errors.append(f_prefix + "missing tasking")
            if not _is_positive_number(f.get("flightSize")):
                errors.append(f_prefix + f"flightSize must be a positive number, got {f.get('flightSize')!r}")
            if not _is_positive_number(f.get("flightCount")):
                errors.append(f_prefix + f"flightCount must be a positive number, got {f.get('flightCount')!r}")

    for error in errors:
        logger.warning(error)
    return errors
