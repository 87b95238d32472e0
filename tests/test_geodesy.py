#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "pytest",
# ]
# ///
"""Test great-circle calculations for correctness on spherical Earth."""

import math
import sys
from pathlib import Path

import pytest

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from qthlocator.geodesy import (
    EARTH_CIRCUMFERENCE_KM,
    EARTH_RADIUS_KM,
    bearing,
    bearing_to_direction,
    calc_bearing,
    calc_distance_km,
    calculate_qrb_qtf,
    destination_point,
    distance,
    great_circle_path,
    long_path_bearing,
    long_path_distance,
    midpoint,
)
from qthlocator.maidenhead import location_from_coordinates, location_from_locator
from qthlocator.models import Coordinates

VIENNA = Coordinates(48.2082, 16.3738)
NEW_YORK = Coordinates(40.7128, -74.0060)


def test_bearing_known_values():
    """Test bearing calculation with known geographic cases."""

    # Due East from equator
    bearing_deg = calc_bearing(0, 0, 0, 90)
    print(f"Due East from equator: {bearing_deg:.1f}° (expected: 90.0°)")
    assert abs(bearing_deg - 90.0) < 0.1

    # Due North
    assert abs(calc_bearing(0, 0, 45, 0) - 0.0) < 0.1

    # Due South
    assert abs(calc_bearing(45, 0, 0, 0) - 180.0) < 0.1

    # Due West is 270°, never -90°
    assert abs(calc_bearing(0, 90, 0, 0) - 270.0) < 0.1

    # Folsom, CA to London, UK: roughly NE
    bearing_deg = calc_bearing(38.6, -121.2, 51.5, -0.2)
    print(f"Folsom to London: {bearing_deg:.1f}° (expected: ~35-45° NE)")
    assert 30 < bearing_deg < 50

    # Halfway around equator: initial bearing due East
    assert abs(calc_bearing(0, 0, 0, 180) - 90.0) < 0.1


def test_distance_known_values():
    """Test distance calculation with known values."""

    # Quarter way around equator
    dist = calc_distance_km(0, 0, 0, 90)
    print(f"Quarter equator: {dist:.0f} km (expected: ~10,000 km)")
    assert abs(dist - 10008) < 100

    # Halfway around Earth at equator
    assert abs(calc_distance_km(0, 0, 0, 180) - 20015) < 100

    # Equator to pole
    assert abs(calc_distance_km(0, 0, 90, 0) - 10008) < 100

    # Folsom to London
    assert abs(calc_distance_km(38.6, -121.2, 51.5, -0.2) - 8600) < 200

    # Same point
    assert calc_distance_km(48.2, 16.4, 48.2, 16.4) == 0


def test_bearing_to_direction():
    assert bearing_to_direction(0) == "N"
    assert bearing_to_direction(11.2) == "N"
    assert bearing_to_direction(11.3) == "NNE"
    assert bearing_to_direction(90) == "E"
    assert bearing_to_direction(180) == "S"
    assert bearing_to_direction(292.5) == "WNW"
    assert bearing_to_direction(350) == "N"
    assert bearing_to_direction(359.9) == "N"
    assert bearing_to_direction(-22.5) == "NNW"
    assert bearing_to_direction(720 + 45) == "NE"
    assert bearing_to_direction(math.nan) == "?"


def test_vienna_to_new_york():
    """Vienna to New York on a 6371 km sphere is about 6796 km, heading ~300°"""
    dist = distance(VIENNA, NEW_YORK)
    head = bearing(VIENNA, NEW_YORK)
    print(f"Vienna -> NYC: {dist.kilometers} km, {head.degrees}° {head.cardinal}")

    assert 6750 < dist.kilometers < 6850
    assert 295 < head.degrees < 305
    assert head.cardinal == "WNW"


def test_distance_units_round_independently():
    km = calc_distance_km(VIENNA.latitude, VIENNA.longitude, NEW_YORK.latitude, NEW_YORK.longitude)
    dist = distance(VIENNA, NEW_YORK)

    assert dist.kilometers == round(km, 2)
    assert dist.miles == round(km * 0.621371, 2)
    assert dist.nautical_miles == round(km / 1.852, 2)


def test_bearing_range_and_precision():
    head = bearing(Coordinates(0, 90), Coordinates(0, 0))
    assert head.degrees == 270.0
    assert head.cardinal == "W"

    head = bearing(VIENNA, NEW_YORK)
    assert 0 <= head.degrees < 360
    assert head.degrees == round(head.degrees, 1)


class TestLongPath:

    def test_distance_complements_circumference(self):
        short = distance(VIENNA, NEW_YORK)
        long_ = long_path_distance(short.kilometers)
        assert short.kilometers + long_.kilometers == pytest.approx(EARTH_CIRCUMFERENCE_KM, abs=0.01)
        long_km = EARTH_CIRCUMFERENCE_KM - short.kilometers
        assert long_.miles == round(long_km * 0.621371, 2)
        assert long_.nautical_miles == round(long_km / 1.852, 2)

    def test_bearing_reversed(self):
        short = bearing(VIENNA, NEW_YORK)
        long_ = long_path_bearing(short.degrees)
        assert (long_.degrees - short.degrees) % 360 == pytest.approx(180)

    def test_bearing_values(self):
        assert long_path_bearing(270.0).degrees == 90.0
        assert long_path_bearing(270.0).cardinal == "E"
        assert long_path_bearing(0).degrees == 180.0
        assert long_path_bearing(359.9).degrees == pytest.approx(179.9)

    def test_bearing_never_360(self):
        result = long_path_bearing(179.96)
        assert result.degrees == 0.0
        assert result.cardinal == "N"


def test_calculate_qrb_qtf():
    home = location_from_locator("JN88ee", label="Home")
    dx = location_from_coordinates(NEW_YORK)

    result = calculate_qrb_qtf(home, dx)

    assert result.from_location is home
    assert result.to_location is dx
    assert result.short_path.distance == distance(home.coordinates, dx.coordinates)
    assert result.short_path.bearing == bearing(home.coordinates, dx.coordinates)
    assert result.long_path.distance == long_path_distance(result.short_path.distance.kilometers)
    assert result.long_path.bearing == long_path_bearing(result.short_path.bearing.degrees)
    assert result.short_path.bearing.cardinal == "WNW"
    assert result.long_path.bearing.cardinal == "ESE"

    # Pure: same inputs, same result
    assert calculate_qrb_qtf(home, dx) == result


class TestGreatCirclePath:

    def test_zero_length(self):
        points = great_circle_path(VIENNA, VIENNA, 10)
        assert len(points) == 10
        assert all(p == VIENNA for p in points)

    def test_endpoints_and_count(self):
        points = great_circle_path(VIENNA, NEW_YORK, 50)
        assert len(points) == 50
        assert points[0].latitude == pytest.approx(VIENNA.latitude)
        assert points[0].longitude == pytest.approx(VIENNA.longitude)
        assert points[-1].latitude == pytest.approx(NEW_YORK.latitude)
        assert points[-1].longitude == pytest.approx(NEW_YORK.longitude)

    def test_points_on_great_circle(self):
        total = calc_distance_km(VIENNA.latitude, VIENNA.longitude, NEW_YORK.latitude, NEW_YORK.longitude)
        for p in great_circle_path(VIENNA, NEW_YORK, 20):
            d1 = calc_distance_km(VIENNA.latitude, VIENNA.longitude, p.latitude, p.longitude)
            d2 = calc_distance_km(p.latitude, p.longitude, NEW_YORK.latitude, NEW_YORK.longitude)
            assert d1 + d2 == pytest.approx(total, abs=1e-3)

    def test_path_goes_north_of_rhumb_line(self):
        """Great circle from Europe to North America bulges toward the pole"""
        points = great_circle_path(VIENNA, NEW_YORK, 11)
        assert max(p.latitude for p in points) > VIENNA.latitude + 5

    def test_antimeridian_is_one_sequence(self):
        points = great_circle_path(Coordinates(0, 170), Coordinates(0, -170), 5)
        assert len(points) == 5
        assert [round(abs(p.longitude)) for p in points] == [170, 175, 180, 175, 170]
        assert all(abs(p.latitude) < 1e-9 for p in points)
        assert all(-180 <= p.longitude <= 180 for p in points)

    def test_antipodal(self):
        points = great_circle_path(Coordinates(0, 0), Coordinates(0, 180), 5)
        assert len(points) == 5
        assert points[-1].latitude == pytest.approx(0, abs=1e-9)
        assert abs(points[-1].longitude) == pytest.approx(180)

    def test_step_counts(self):
        assert great_circle_path(VIENNA, NEW_YORK, 0) == []
        assert great_circle_path(VIENNA, NEW_YORK, -3) == []
        assert great_circle_path(VIENNA, NEW_YORK, 1) == [VIENNA]
        assert len(great_circle_path(VIENNA, NEW_YORK)) == 100


class TestDestinationPoint:

    def test_quarter_circle_east(self):
        dest = destination_point(Coordinates(0, 0), math.pi / 2 * EARTH_RADIUS_KM, 90)
        assert dest.latitude == pytest.approx(0, abs=1e-9)
        assert dest.longitude == pytest.approx(90)

    def test_quarter_circle_north(self):
        dest = destination_point(Coordinates(0, 0), math.pi / 2 * EARTH_RADIUS_KM, 0)
        assert dest.latitude == pytest.approx(90)

    def test_zero_distance(self):
        dest = destination_point(VIENNA, 0, 123)
        assert dest.latitude == pytest.approx(VIENNA.latitude)
        assert dest.longitude == pytest.approx(VIENNA.longitude)

    def test_reaches_target(self):
        km = calc_distance_km(VIENNA.latitude, VIENNA.longitude, NEW_YORK.latitude, NEW_YORK.longitude)
        heading = calc_bearing(VIENNA.latitude, VIENNA.longitude, NEW_YORK.latitude, NEW_YORK.longitude)
        dest = destination_point(VIENNA, km, heading)
        assert dest.latitude == pytest.approx(NEW_YORK.latitude, abs=1e-6)
        assert dest.longitude == pytest.approx(NEW_YORK.longitude, abs=1e-6)

    def test_wraps_longitude(self):
        dest = destination_point(Coordinates(0, 170), math.pi / 9 * EARTH_RADIUS_KM, 90)
        assert dest.longitude == pytest.approx(-170)

    def test_nan_propagates(self):
        dest = destination_point(Coordinates(math.nan, 0), 100, 45)
        assert math.isnan(dest.latitude)


def test_midpoint():
    mid = midpoint(Coordinates(0, 0), Coordinates(0, 90))
    assert mid.latitude == pytest.approx(0, abs=1e-9)
    assert mid.longitude == pytest.approx(45)

    mid = midpoint(VIENNA, NEW_YORK)
    path = great_circle_path(VIENNA, NEW_YORK, 3)
    assert mid.latitude == pytest.approx(path[1].latitude)
    assert mid.longitude == pytest.approx(path[1].longitude)


if __name__ == "__main__":
    test_bearing_known_values()
    test_distance_known_values()
    test_vienna_to_new_york()
    print("\n✅ Geodesy spot checks passed")
