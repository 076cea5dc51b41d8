import pytest

from bike_router.services.instruction_aggregator import (
    ARRIVE_MANEUVER,
    DEFAULT_DESTINATION_LABEL,
    aggregate_route,
)

from conftest import StubLookups, leg, step


A, B, C = (43.8231, -111.7924), (43.8260, -111.7924), (43.8260, -111.7880)


def test_cumulative_totals_are_before_each_step(two_leg_route):
    instructions, _ = aggregate_route(two_leg_route.legs, StubLookups())

    assert [i.distance_meters for i in instructions] == [0, 320, 670, 670, 1115, 1435]
    assert [i.duration_seconds for i in instructions] == [0, 60, 130, 130, 220, 285]


def test_totals_never_reset_between_legs(two_leg_route):
    instructions, _ = aggregate_route(two_leg_route.legs, StubLookups())
    dists = [i.distance_meters for i in instructions]
    assert dists == sorted(dists)


def test_each_leg_ends_with_arrival(two_leg_route):
    instructions, points = aggregate_route(two_leg_route.legs, StubLookups())

    arrivals = [i for i in instructions if i.maneuver == ARRIVE_MANEUVER]
    assert len(arrivals) == 2
    assert instructions[2].maneuver == ARRIVE_MANEUVER
    assert instructions[-1].maneuver == ARRIVE_MANEUVER
    assert instructions[-1].start_location == two_leg_route.legs[-1].end_location
    assert instructions[-1].street_name == DEFAULT_DESTINATION_LABEL
    # one point per step plus one per leg end
    assert len(points) == 6


def test_arrival_uses_reverse_lookup_label():
    lookups = StubLookups(labels={C: "Porter Park"})
    instructions, points = aggregate_route([leg([step(A, B, "Head <b>north</b>", 300, 60)], C)], lookups)

    assert instructions[-1].street_name == "Porter Park"
    assert instructions[-1].instruction == "Arrive at Porter Park"
    assert points[-1].description == "Porter Park"


def test_street_names_come_from_markup_without_labels(two_leg_route):
    instructions, points = aggregate_route(two_leg_route.legs, StubLookups())

    assert instructions[0].street_name == "S Center St"
    assert instructions[1].street_name == "E Main St"
    assert instructions[4].street_name == "Continue straight"
    assert points[0].description == "S Center St"


def test_usable_external_label_is_preferred():
    lookups = StubLookups(labels={A: "S 2nd W"})
    instructions, points = aggregate_route(
        [leg([step(A, B, "Turn <b>left</b> onto <b>Market St</b>", 100, 20)], B)], lookups
    )
    assert instructions[0].street_name == "S 2nd W"
    assert points[0].description == "S 2nd W"


def test_unnamed_external_label_uses_markup():
    lookups = StubLookups(labels={A: "Unnamed Road"})
    instructions, _ = aggregate_route(
        [leg([step(A, B, "Turn <b>left</b> onto <b>Market St</b>", 100, 20)], B)], lookups
    )
    assert instructions[0].street_name == "Market St"


def test_failed_elevation_lookup_defaults_to_zero():
    lookups = StubLookups(elevations={A: 1480.5})
    _, points = aggregate_route([leg([step(A, B, "Go", 10, 2)], C)], lookups)

    assert points[0].elevation == 1480.5
    assert points[1].elevation == 0.0
    assert all(p.is_down_hill is False for p in points)


def test_instruction_keeps_raw_markup_and_maneuver():
    markup = "Turn <b>right</b> onto <b>E Main St</b>"
    instructions, _ = aggregate_route([leg([step(A, B, markup, 10, 2, "turn-right")], C)], StubLookups())
    assert instructions[0].instruction == markup
    assert instructions[0].maneuver == "turn-right"
    assert instructions[0].start_location.lat == A[0]


def test_no_legs_gives_nothing():
    assert aggregate_route([], StubLookups()) == ([], [])


def test_leg_without_steps_still_arrives():
    instructions, points = aggregate_route([leg([], C)], StubLookups())
    assert len(instructions) == 1 and instructions[0].maneuver == ARRIVE_MANEUVER
    assert instructions[0].distance_meters == 0
    assert len(points) == 1


@pytest.mark.parametrize("workers", [2, 8])
def test_parallel_lookups_match_sequential(two_leg_route, workers):
    labels = {A: "S Center St", C: "Porter Park"}
    elevations = {A: 1480.0, B: 1478.0, C: 1479.5}
    sequential = aggregate_route(two_leg_route.legs, StubLookups(elevations, labels), max_workers=1)
    parallel = aggregate_route(two_leg_route.legs, StubLookups(elevations, labels), max_workers=workers)
    assert parallel == sequential
