import random

import pytest

from console_derby.catalog import HorseCatalog
from console_derby.engine import HorseProfile, LengthClass, RaceStatus, TelemetryCollector, Terrain
from console_derby.race_factory import RaceFactory


def _catalog(size):
    return HorseCatalog(
        HorseProfile.from_ratings(f"Horse {i}", 30 + i * 4, 70 - i * 2, 40 + i * 3, 5 + (i % 8))
        for i in range(size)
    )


def _factory(size, seed=1, **options):
    options.setdefault("tick_seconds", 0)
    return RaceFactory(_catalog(size), random.Random(seed), **options)


@pytest.mark.parametrize("n", [5, 11])
def test_field_sizes_at_both_bounds_build_valid_races(n):
    race = _factory(14).build_race(n, LengthClass.MIDDLE, Terrain.GRASS)
    assert len(race.racers) == n
    assert sorted(r.get_number() for r in race.racers) == list(range(1, n + 1))
    assert len({r.name for r in race.racers}) == n
    assert race.length in (7.0, 8.0)
    assert race.terrain is Terrain.GRASS
    assert race.start() is not None


def test_request_larger_than_catalog_is_clamped(capsys):
    race = _factory(3).build_race(10, LengthClass.SHORT, Terrain.DIRT)
    assert [r.get_number() for r in race.racers] == [1, 2, 3]
    assert len({r.name for r in race.racers}) == 3
    assert "field reduced" in capsys.readouterr().out


def test_lengths_come_from_the_requested_bucket():
    factory = _factory(6, seed=21)
    for length_class, bucket in (
        (LengthClass.SHORT, {5.0, 5.5, 6.0}),
        (LengthClass.MIDDLE, {7.0, 8.0}),
        (LengthClass.LONG, {9.0, 10.0, 12.0}),
    ):
        seen = {factory.pick_length(length_class) for _ in range(200)}
        assert seen == bucket


def test_field_size_is_drawn_between_five_and_eleven():
    factory = _factory(1, seed=3)
    sizes = {factory.pick_field_size() for _ in range(500)}
    assert sizes == set(range(5, 12))


def test_empty_catalog_builds_a_degenerate_race():
    race = _factory(0).build_race(7, LengthClass.LONG, Terrain.MUD)
    assert race.racers == []
    assert race.start() is None
    assert race.status is RaceStatus.FINISHED


def test_same_seed_reproduces_selection_lanes_length_and_ticks():
    def run(seed):
        telemetry = TelemetryCollector()
        factory = _factory(12, seed=seed, telemetry=telemetry)
        race = factory.build_race(8, LengthClass.SHORT, Terrain.DIRT)
        lanes = [(r.get_number(), r.name) for r in race.racers]
        race.start()
        return lanes, race.length, telemetry.position_history(), race.winner.name

    assert run(77) == run(77)


def test_each_race_gets_fresh_racer_state():
    factory = _factory(5, seed=9)
    first = factory.build_race(5, LengthClass.SHORT, Terrain.DIRT)
    first.start()
    second = factory.build_race(5, LengthClass.SHORT, Terrain.DIRT)
    assert all(r.current_position == 0 for r in second.racers)
    assert second.status is RaceStatus.CONFIGURED
    assert not set(map(id, first.racers)) & set(map(id, second.racers))
