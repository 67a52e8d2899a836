"""
Integration tests for the packaged table data.

Every shipped table is loaded with strict range checks and resolved over
many seeds for each parameter combination; every result must satisfy the
output contract.
"""

import itertools
import random

import pytest

from oob_toolkit import ForcedRolls, resolve, validate
from oob_toolkit.core.models.flights import Result
from oob_toolkit.core.schemas.validator import coverage_errors
from oob_toolkit.core.utils.serialization import LEGACY_SPLIT_PAIRS
from oob_toolkit.engine.resolution.ordnance import NOTE_E_ORDNANCE, SEAD_SUFFIX

SEEDS = range(40)
SPLIT_NAMES = {f"{a}/{b}" for a, b in LEGACY_SPLIT_PAIRS}
BALTIC_DATES = ["15-20 May", "21-31 May", "1-15 June", 1, 2, 3]

# Table id -> caller parameter combinations exercising every branch
TABLE_PARAMS = {
    "A": [{"atafZone": z, "scenarioDate": d} for z, d in itertools.product(("2ATAF", "4ATAF"), ("pre", "post"))],
    "B": [{"atafZone": z, "scenarioDate": d} for z, d in itertools.product(("2ATAF", "4ATAF"), ("pre", "post"))],
    "C": [{"scenarioDate": "pre"}, {"scenarioDate": "post"}],
    "D": [{}],
    "E": [{"nationality": n} for n in ("US", "UK", "FRG", "BE", "NE", "CAN")],
    "F": [{"missionType": m} for m in ("Fast FAC", "Standoff Jamming", "Tactical Recon")],
    "G": [{}],
    "H": [{}],
    "I": [{}],
    "J": [{}],
    "K": [{"nationality": n} for n in ("USSR", "GDR")],
    "L": [{"missionType": m} for m in ("Standoff Jamming", "Tactical Recon")],
    "A2": [{"scenarioDate": d} for d in BALTIC_DATES],
    "B2": [{"scenarioDate": d} for d in BALTIC_DATES],
    "C2": [{"scenarioDate": d} for d in BALTIC_DATES],
    "F2": [{}],
    "G2": [{"scenarioDate": d} for d in BALTIC_DATES],
    "H2": [{"scenarioDate": d} for d in ("15-31 May", "1 June+", 1, 2, 3)],
    "I2": [{}],
    "J2": [{}],
    "J3": [{"nationality": n} for n in ("USSR", "GDR", "POL")],
    "K2": [{"hexType": h} for h in ("land", "sea")],
    "L2": [{"missionType": m} for m in ("Standoff Jamming", "Maritime Patrol")],
}

CASES = [(table_id, params) for table_id, combos in TABLE_PARAMS.items() for params in combos]


def test_table_params_when_compared_then_cover_every_packaged_table(registry):
    assert set(TABLE_PARAMS) == set(registry.get_available_tables())


@pytest.mark.parametrize("table_id", sorted(TABLE_PARAMS))
def test_definition_when_loaded_then_ranges_partition_die(registry, table_id):
    """Every RangeTable, including variant sub-tables, covers 1..10 exactly once."""
    assert coverage_errors(registry.get_definition(table_id)) == []


@pytest.mark.parametrize("table_id,params", CASES)
def test_resolve_when_any_seed_then_contract_holds(registry, table_id, params):
    """Results are valid, fully resolved and faction-consistent."""
    definition = registry.get_definition(table_id)
    for seed in SEEDS:
        result = resolve(table_id, params, rng=random.Random(seed), registry=registry)
        assert isinstance(result, Result), f"{table_id} {params} seed={seed}: {result}"
        assert validate(result) == []
        assert result.faction == definition.faction
        for flight in result.flights:
            assert flight.aircraft_type not in SPLIT_NAMES
            assert "²" not in flight.aircraft_type and "¹" not in flight.aircraft_type
            assert "/" not in flight.nationality
            if flight.ordnance:
                assert len(flight.ordnance) == flight.flight_count


@pytest.mark.parametrize("scenario_date", ["pre", "post"])
def test_table_c_sead_when_any_seed_then_four_flights_with_arm(registry, scenario_date):
    """Split or not, SEAD always totals four flights, each with ARM."""
    for seed in SEEDS:
        result = resolve(
            "C",
            {"scenarioDate": scenario_date, "tasking": "SEAD"},
            rng=random.Random(seed),
            registry=registry,
        )
        assert sum(f.flight_count for f in result.flights) == 4
        for flight in result.flights:
            assert all(o.endswith(SEAD_SUFFIX) for o in flight.ordnance)


class TestTableCSead:
    """End-to-end SEAD split on Table C."""

    def test_resolve_when_split_rolled_then_two_records_with_ordnance(self, registry):
        result = resolve(
            "C",
            {"scenarioDate": "pre", "tasking": "SEAD"},
            rng=ForcedRolls([1, 5, 3, 7, 2, 9]),
            trace=True,
            registry=registry,
        )

        first, second = result.flights
        assert (first.aircraft_type, second.aircraft_type) == ("F-4G", "F-4E")
        assert (first.flight_count, second.flight_count) == (2, 2)
        assert first.nationality == second.nationality == "US"
        assert first.ordnance == ("Bombs/CBU/Rockets + ARM", "Bombs/CBU/Rockets + EOGM + ARM")
        assert second.ordnance == ("Bombs/CBU/Rockets + ARM", "Bombs/CBU/Rockets + EOGM + LGB/EOGB + ARM")
        assert result.display_text.splitlines() == [
            "1 x {2} US F-4G, SEAD (Bombs/CBU/Rockets + ARM)",
            "1 x {2} US F-4G, SEAD (Bombs/CBU/Rockets + EOGM + ARM)",
            "1 x {2} US F-4E, SEAD (Bombs/CBU/Rockets + ARM)",
            "1 x {2} US F-4E, SEAD (Bombs/CBU/Rockets + EOGM + LGB/EOGB + ARM)",
        ]
        assert len(result.debug_trace) == 6

    def test_resolve_when_f16_split_then_modifier_applied(self, registry):
        result = resolve(
            "C",
            {"scenarioDate": "post", "tasking": "SEAD"},
            rng=ForcedRolls([6, 9, 1, 1, 3, 9]),
            registry=registry,
        )
        f4g, f16 = result.flights
        assert (f4g.aircraft_type, f16.aircraft_type) == ("F-4G", "F-16C")
        assert f16.ordnance == ("Bombs/CBU/Rockets + EOGM + ARM", "Bombs/CBU/Rockets + EOGM + LGB/EOGB + ARM")


class TestVariantTables:
    """Legacy glyph entries resolve through their sub-tables."""

    def test_table_c_bombing_when_f4_rolled_then_sub_roll_resolves(self, registry):
        result = resolve(
            "C",
            {"scenarioDate": "pre", "tasking": "Bombing"},
            rng=ForcedRolls([2, 9, 3, 1, 1, 1, 1]),
            registry=registry,
        )
        (flight,) = result.flights
        assert flight.aircraft_type == "F-4D"
        assert flight.aircraft_id == "US-F-4D-1"
        assert flight.flight_count == 4

    def test_table_g_when_mig23_rolled_then_concrete_variant(self, registry):
        result = resolve("G", rng=ForcedRolls([1, 1, 10]), registry=registry)
        assert result.flights[0].aircraft_type == "MiG-23ML"


class TestGatedTables:
    """Packaged nationality-gated tables."""

    def test_table_e_when_alias_requested_then_package_and_actual(self, registry):
        result = resolve("E", {"nationality": "BE"}, rng=random.Random(3), registry=registry)
        assert {f.nationality for f in result.flights} == {"UK"}
        assert {f.actual_nationality for f in result.flights} == {"BE"}
        assert [f.tasking for f in result.flights] == ["Rescue", "Escort", "RESCAP"]

    def test_table_i_when_gdr_mig21_then_restricted_ordnance(self, registry):
        # Nationality GDR, escort MiG-21MF, SEAD MiG-21 (restricted), bombing MiG-21 (restricted)
        source = ForcedRolls([10, 1, 6, 1])
        result = resolve("I", rng=source, registry=registry)
        assert source.remaining == 0
        escort, sead, bombing = result.flights
        assert escort.ordnance == ()
        assert sead.ordnance == bombing.ordnance[:2]
        assert "Note E" in sead.ordnance[0]
        assert not sead.ordnance[0].endswith(SEAD_SUFFIX)
        assert result.raid_type == "Bombing Raid"


class TestBalticApproaches:
    """Packaged Baltic Approaches tables."""

    def test_table_b2_when_ordinal_date_and_nf5_then_dutch_flight(self, registry):
        result = resolve("B2", {"scenarioDate": 1}, rng=ForcedRolls([8, 7]), registry=registry)
        (flight,) = result.flights
        assert (flight.nationality, flight.aircraft_type) == ("NE", "NF-5A")
        assert flight.display_text == "1 x {2} NE NF-5A, CAP"

    def test_table_h2_when_first_two_ordinals_then_same_may_branch(self, registry):
        rolls = [8, 3]
        a = resolve("H2", {"scenarioDate": 1}, rng=ForcedRolls(rolls), registry=registry)
        b = resolve("H2", {"scenarioDate": 2}, rng=ForcedRolls(rolls), registry=registry)
        assert a == b
        assert a.flights[0].aircraft_type == "MiG-23MF"

    def test_table_i2_when_pol_mig21_then_restricted_without_rolls(self, registry):
        # Nationality POL, escort MiG-21MF, SEAD MiG-21bis, bombing MiG-21bis
        source = ForcedRolls([5, 1, 9, 1])
        result = resolve("I2", rng=source, registry=registry)
        assert source.remaining == 0
        escort, sead, bombing = result.flights
        assert {f.nationality for f in result.flights} == {"POL"}
        assert escort.ordnance == ()
        assert sead.ordnance == (NOTE_E_ORDNANCE,) * 2
        assert bombing.ordnance == (NOTE_E_ORDNANCE,) * 5

    def test_table_j2_when_deep_strike_then_aircraft_and_ordnance_per_flight(self, registry):
        rolls = [1, 4, 8, 5, 2, 8, 9, 1, 3, 7, 10, 10]
        result = resolve(
            "J2", {"tasking": "Deep Strike"}, rng=ForcedRolls(rolls), trace=True, registry=registry
        )
        assert [f.aircraft_type for f in result.flights] == ["Su-24", "MiG-27K"] * 3
        assert {f.flight_count for f in result.flights} == {1}
        assert [f.ordnance[0] for f in result.flights] == [
            "Bombs/CBU/Rockets",
            "Bombs/CBU/Rockets + EOGM",
            "Bombs/CBU/Rockets + EOGM + EOGB/LGB",
            "Bombs/CBU/Rockets",
            "Bombs/CBU/Rockets + EOGM",
            "Bombs/CBU/Rockets + EOGM + EOGB/LGB",
        ]
        assert result.flights[1].debug_trace == (
            "Deep Strike Flight 2 Aircraft: 8",
            "Deep Strike Flight 2 Ordnance: 5",
        )
        assert result.display_text.splitlines()[1] == "1 x {4} USSR MiG-27K, Deep Strike (Bombs/CBU/Rockets + EOGM)"

    def test_table_j2_when_any_seed_then_flight_totals_per_tasking(self, registry):
        for seed in SEEDS:
            result = resolve("J2", rng=random.Random(seed), registry=registry)
            totals = {}
            for flight in result.flights:
                totals[flight.tasking] = totals.get(flight.tasking, 0) + flight.flight_count
            assert totals == {"Escort Jamming": 3, "Close Escort": 3, "Deep Strike": 6, "Recon": 3}

    def test_table_k2_when_sea_hex_then_naval_rescue_helicopters(self, registry):
        result = resolve("K2", {"hexType": "sea"}, rng=random.Random(2), registry=registry)
        rescue = [f for f in result.flights if f.tasking == "CSAR"]
        assert {f.aircraft_type for f in rescue} == {"Mi-14PS"}
        assert result.raid_type == "Combat Rescue"
