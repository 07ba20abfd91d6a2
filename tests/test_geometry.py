import pytest

from osmtool.geometry import (
    Area,
    Box,
    Coordinates,
    Location,
    calculate_double_area,
    is_ccw,
)


def test_ring_orientation_clockwise():
    c = [Coordinates(0, 0), Coordinates(0, 1), Coordinates(1, 1), Coordinates(1, 0), Coordinates(0, 0)]
    assert calculate_double_area(c) == pytest.approx(-2.0)
    assert not is_ccw(c)


def test_ring_orientation_counter_clockwise():
    c = [Coordinates(0, 0), Coordinates(1, 0), Coordinates(1, 1), Coordinates(0, 1), Coordinates(0, 0)]
    assert calculate_double_area(c) == pytest.approx(2.0)
    assert is_ccw(c)


def test_ring_orientation_with_locations():
    ring = [Location(0, 0), Location(1, 0), Location(1, 1), Location(0, 1), Location(0, 0)]
    assert calculate_double_area(ring) == pytest.approx(2.0)
    assert is_ccw(ring)
    assert not is_ccw(list(reversed(ring)))


def test_area_needs_two_points():
    with pytest.raises(ValueError):
        calculate_double_area([Coordinates(0, 0)])


def test_location_validity():
    assert Location(10.0, 10.0).valid()
    assert not Location().valid()
    assert not Location().is_defined()
    assert not Location(181.0, 0.0).valid()
    assert not Location(0.0, -90.5).valid()


def test_location_equality_and_fixed_point():
    loc = Location(10.0, 10.0)
    assert loc == Location(10.0, 10.0)
    assert loc == Location.from_fixed(loc.x, loc.y)
    assert loc.lon == pytest.approx(10.0)
    assert loc != Location(10.0, 10.5)


def test_location_as_string():
    assert Location(10.0, 10.0).as_string(" ") == "10 10"
    assert Location(-1.5, 0.25).as_string(",") == "-1.5,0.25"


def test_invalid_location_as_string_raises():
    with pytest.raises(ValueError):
        Location().as_string(",")


def test_box_extend_and_contains():
    box = Box()
    assert not box.valid()
    box.extend(Location(1.0, 2.0)).extend(Location(-1.0, 0.5))
    assert box.valid()
    assert box.bottom_left == Location(-1.0, 0.5)
    assert box.top_right == Location(1.0, 2.0)
    assert box.contains(Location(0.0, 1.0))
    assert not box.contains(Location(2.0, 1.0))


def test_box_ignores_invalid_location():
    box = Box()
    box.extend(Location(200.0, 0.0))
    assert not box.valid()
    box.extend(Location(5.0, 5.0))
    assert box.bottom_left == box.top_right == Location(5.0, 5.0)


def test_area_rings():
    area = Area()
    outer = area.add_outer_ring([Location(10, 10), Location(12, 10), Location(12, 12), Location(10, 10)])
    inner = area.add_inner_ring([Location(11, 11), Location(11, 11.5), Location(11.5, 11), Location(11, 11)])
    second = area.add_outer_ring([Location(20, 20), Location(21, 20), Location(21, 21), Location(20, 20)])
    assert area.num_rings() == (2, 1)
    assert area.outer_rings() == [outer, second]
    assert area.inner_rings(outer) == [inner]
    assert area.inner_rings(second) == []
    assert area.outer_rings()[0][0] == Location(10.0, 10.0)


def test_area_envelope():
    area = Area()
    area.add_outer_ring([Location(0, 0), Location(2, 0), Location(2, 2), Location(0, 0)])
    env = area.envelope()
    assert env.bottom_left == Location(0, 0)
    assert env.top_right == Location(2, 2)


def test_area_unknown_outer_ring():
    area = Area()
    with pytest.raises(ValueError):
        area.inner_rings((Location(0, 0),))