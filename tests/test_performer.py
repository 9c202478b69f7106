import math

import pytest

from stagelink import (
    AreaConfig,
    Heading,
    InvalidGeometryError,
    Performer,
    Position,
    get_area_config,
    hearing_areas,
    sector_contains,
    set_area_config,
    speaking_areas,
)


def test_speaking_sectors_sit_either_side_of_the_heading():
    p = Performer.at(1, 0.0, 0.0, 0.0)
    left, right = speaking_areas(p, AreaConfig())

    assert sector_contains(left, Position(5.0, 1.0))
    assert not sector_contains(right, Position(5.0, 1.0))
    assert sector_contains(right, Position(5.0, -1.0))
    assert not sector_contains(left, Position(5.0, -1.0))
    # straight ahead lies on both boundaries
    assert sector_contains(left, Position(5.0, 0.0))
    assert sector_contains(right, Position(5.0, 0.0))
    # behind the performer
    assert not sector_contains(left, Position(-5.0, 0.0))
    assert not sector_contains(right, Position(-5.0, 0.0))


def test_sectors_follow_config_radius_and_spread():
    config = AreaConfig(speaking_radius=3.0, speaking_spread=math.pi / 6)
    left, _ = speaking_areas(Performer.at(1, 0.0, 0.0, 0.0), config)

    assert left.radius == 3.0
    assert not sector_contains(left, Position(4.0, 0.5))
    assert sector_contains(left, Position(2.0, 0.5))
    # 45 degrees is outside a 30 degree spread
    assert not sector_contains(left, Position(1.0, 1.0))


def test_hearing_sectors_are_offset_sideways():
    config = AreaConfig(ear_offset=0.5)
    left, right = hearing_areas(Performer.at(1, 0.0, 0.0, 0.0), config)

    assert math.isclose(left.center.x, 0.0, abs_tol=1e-12)
    assert math.isclose(left.center.y, 0.5)
    assert math.isclose(right.center.x, 0.0, abs_tol=1e-12)
    assert math.isclose(right.center.y, -0.5)
    assert left.radius == config.hearing_radius


def test_areas_are_deterministic():
    p = Performer.at(7, 1.25, -3.5, 2.2)
    config = AreaConfig(ear_offset=0.3)
    assert speaking_areas(p, config) == speaking_areas(p, config)
    assert hearing_areas(p, config) == hearing_areas(p, config)


def test_heading_direction():
    d = Heading(math.pi / 2).direction()
    assert math.isclose(d.x, 0.0, abs_tol=1e-12)
    assert math.isclose(d.y, 1.0)


@pytest.mark.parametrize('heading', [float('nan'), float('inf')])
def test_performer_rejects_non_finite_heading(heading):
    with pytest.raises(InvalidGeometryError):
        Performer.at(1, 0.0, 0.0, heading)


def test_performers_are_hashable_values():
    a = Performer.at(1, 0.0, 0.0, 0.0)
    b = Performer.at(1, 0.0, 0.0, 0.0)
    assert a == b
    assert len({a, b}) == 1


@pytest.mark.parametrize(
    'kwargs',
    [
        {'speaking_spread': 0.0},
        {'hearing_spread': math.pi + 0.01},
        {'speaking_radius': -1.0},
        {'hearing_radius': float('inf')},
        {'ear_offset': -0.1},
    ],
)
def test_area_config_rejects_bad_values(kwargs):
    with pytest.raises(InvalidGeometryError):
        AreaConfig(**kwargs)


def test_default_area_config_is_copied():
    original = get_area_config()
    try:
        fetched = get_area_config()
        fetched.speaking_radius = 99.0
        assert get_area_config().speaking_radius == original.speaking_radius

        set_area_config(AreaConfig(speaking_radius=2.0))
        left, _ = speaking_areas(Performer.at(1, 0.0, 0.0, 0.0))
        assert left.radius == 2.0
    finally:
        set_area_config(original)
