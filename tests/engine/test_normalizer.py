"""
Unit Tests for Result Normalization

Every supported legacy layout should normalize onto the same canonical
Result, and normalization should be idempotent.
"""

import pytest

from oob_toolkit.core.models.flights import FlightRecord, Result
from oob_toolkit.engine.contract import flight_from_mapping, normalize, parse_trace


@pytest.fixture
def canonical() -> Result:
    flight = FlightRecord(
        aircraft_type="F-15C",
        nationality="US",
        tasking="CAP",
        flight_size=2,
        flight_count=4,
        source_table="C",
        display_text="4 x {2} US F-15C, CAP",
        debug_trace=("CAP Nation: 1", "CAP Aircraft: 3"),
    )
    return Result(
        table="C",
        faction="NATO",
        flights=(flight,),
        display_text=flight.display_text,
        debug_trace=flight.debug_trace,
    )


class TestNormalizeShapes:
    """Tests for each legacy layout."""

    def test_normalize_when_canonical_dict_then_equal_result(self, canonical):
        """to_dict() output normalizes back to an equal Result."""
        assert normalize(canonical.to_dict()) == canonical

    def test_normalize_when_taskings_layout_then_flights_from_taskings(self):
        raw = {
            "faction": "NATO",
            "taskings": [
                {"aircraft": "F-15C", "nationName": "US", "flightType": "CAP",
                 "quantity": 4, "flightSize": 2, "table": "C"},
                {"aircraft": "F-4G", "nationName": "US", "flightType": "SEAD",
                 "quantity": 4, "flightSize": 2, "ordnance": "Bombs/CBU/Rockets + ARM"},
            ],
        }
        result = normalize(raw)
        assert result.table == "C"
        assert [f.aircraft_type for f in result.flights] == ["F-15C", "F-4G"]
        assert result.flights[0].flight_count == 4
        assert result.flights[1].ordnance == ("Bombs/CBU/Rockets + ARM",) * 4

    def test_normalize_when_tasking_results_layout_then_same_as_taskings(self):
        flight = {"aircraft": "Su-24", "nationName": "USSR", "type": "Bombing", "quantity": 4, "flightSize": 4}
        a = normalize({"taskings": [flight]}, "WP", "I")
        b = normalize({"taskingResults": [flight]}, "WP", "I")
        assert a == b
        assert a.table == "I"
        assert a.faction == "WP"

    def test_normalize_when_flight_results_without_meta_then_fallbacks_used(self):
        raw = {"flightResults": [{"aircraftType": "MiG-29A", "nationality": "USSR",
                                  "tasking": "CAP", "flightCount": 1, "flightSize": 4}]}
        result = normalize(raw, fallback_faction="WP", fallback_table_id="G")
        assert (result.table, result.faction) == ("G", "WP")
        assert result.flights[0].source_table == "G"

    def test_normalize_when_flat_flight_then_single_record(self):
        raw = {
            "aircraft": "MiG-29A",
            "nationName": "USSR",
            "flightType": "CAP",
            "flightSize": 4,
            "text": "1 x {4} USSR MiG-29A, CAP",
            "debugRolls": "[CAP Nation: 3 | CAP Aircraft: 5]",
        }
        result = normalize(raw, "WP", "G")
        (flight,) = result.flights
        assert flight.flight_count == 1
        assert flight.display_text == "1 x {4} USSR MiG-29A, CAP"
        assert flight.debug_trace == ("CAP Nation: 3", "CAP Aircraft: 5")

    def test_normalize_when_not_a_mapping_then_empty_result(self):
        result = normalize(42, "NATO", "A")
        assert result.flights == ()
        assert result.table == "A"


class TestNormalizeIdempotence:
    """normalize(normalize(x)) == normalize(x)."""

    @pytest.mark.parametrize(
        "raw",
        [
            {"taskings": [{"aircraft": "F-15C", "nationName": "US", "flightType": "CAP",
                           "quantity": 2, "flightSize": 2, "table": "B"}], "faction": "NATO"},
            {"aircraft": "Mi-8", "nationName": "USSR", "type": "Rescue", "flightSize": 2,
             "table": "K", "faction": "WP"},
            {"flights": [{"aircraftType": "F-15C", "nationality": "US", "tasking": "CAP",
                          "flightSize": 2, "flightCount": 4}]},
            {"flightResults": [{"aircraftType": "Su-24", "nationality": "USSR", "tasking": "Bombing",
                                "flightCount": 2, "flightSize": 4, "ordnance": "Bombs/CBU/Rockets"}]},
            {"taskingResults": [{"aircraft": "Mi-8", "nationName": "GDR", "type": "CSAR",
                                 "quantity": 1, "flightSize": 2, "table": "K2"}], "raidType": "Combat Rescue"},
        ],
    )
    def test_normalize_when_applied_twice_then_unchanged(self, raw):
        once = normalize(raw)
        assert normalize(once) == once
        assert normalize(once.to_dict()) == once

    @pytest.mark.parametrize("key", ["flights", "flightResults", "taskingResults"])
    def test_normalize_when_nested_without_meta_then_fallbacks_stable(self, key):
        """Fallback table and faction survive a second pass without fallbacks."""
        raw = {key: [{"aircraft": "MiG-29A", "nationName": "USSR", "type": "CAP",
                      "quantity": 2, "flightSize": 4, "text": "2 x {4} USSR MiG-29A, CAP"}]}
        once = normalize(raw, "WP", "G")
        assert (once.table, once.faction) == ("G", "WP")
        assert normalize(once) == once
        assert normalize(once.to_dict()) == once
        assert normalize(once.to_dict(), "NATO", "A") == once

    def test_normalize_when_result_missing_meta_then_filled(self):
        partial = Result(table="", faction="", flights=())
        filled = normalize(partial, "NATO", "D")
        assert (filled.table, filled.faction) == ("D", "NATO")


class TestHelpers:
    """Tests for parse_trace() / flight_from_mapping()."""

    def test_parse_trace_when_bracketed_string_then_split(self):
        assert parse_trace("[A: 1 | B: 2]") == ("A: 1", "B: 2")

    def test_parse_trace_when_empty_then_empty_tuple(self):
        assert parse_trace(None) == ()
        assert parse_trace("") == ()

    def test_flight_from_mapping_when_record_then_returned_as_is(self):
        record = FlightRecord("F-15C", "US", "CAP", 2, 1)
        assert flight_from_mapping(record) is record

    def test_flight_from_mapping_when_no_count_then_defaults_to_one(self):
        flight = flight_from_mapping({"aircraft": "A-10A", "nationName": "US", "type": "CAS"})
        assert flight.flight_count == 1
