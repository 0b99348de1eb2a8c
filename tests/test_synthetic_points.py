"""
Tests for jitter and binary angular subdivision.
"""

import logging

import pytest

from common.errors import CoordinateRangeError
from common.units import Q_
from geocoord.coordinate_models import Coordinate
from geocoord.distance_calculations import bearing_between, distance_between
from geocoord.synthetic_points import (
    BisectionConfig,
    JITTER_SEARCH,
    SUBDIVISION_SEARCH,
    binary_angular_subdivision,
    jitter,
    subdivision_bearing,
)


# =============================================================================
# Test Search Configuration
# =============================================================================

class TestBisectionConfig:
    """Tests for BisectionConfig."""

    def test_jitter_defaults(self):
        assert JITTER_SEARCH.tolerance_m == 0.01
        assert JITTER_SEARCH.max_iterations == 1000

    def test_unbounded_search_spans_half_the_globe(self):
        assert JITTER_SEARCH.upper_bound(10_000) == pytest.approx(180.0)

    def test_subdivision_bound_scales_with_distance(self):
        assert SUBDIVISION_SEARCH.tolerance_m == 10.0
        assert SUBDIVISION_SEARCH.upper_bound(10_000) == pytest.approx(1.0)


# =============================================================================
# Test Jitter
# =============================================================================

class TestJitter:
    """Tests for jitter."""

    def test_four_points_around_origin(self):
        points = jitter(4, Coordinate.ORIGIN, 10_000)

        assert len(points) == 4
        for point in points:
            assert distance_between(Coordinate.ORIGIN, point) == pytest.approx(10_000, abs=1.0)

    def test_four_points_take_the_cardinal_bearings(self):
        points = jitter(4, Coordinate.ORIGIN, 10_000)
        bearings = [bearing_between(Coordinate.ORIGIN, p) for p in points]
        assert bearings == [90, 0, 270, 180]

    def test_points_are_distinct(self):
        points = jitter(6, Coordinate.ORIGIN, 10_000)
        assert len(set(points)) == 6

    def test_mid_latitude_center(self):
        center = Coordinate.from_degrees(47.6062, -122.3321)
        for point in jitter(8, center, 500):
            assert distance_between(center, point) == pytest.approx(500, abs=1.0)

    def test_single_point_returns_center(self):
        center = Coordinate.from_degrees(47.6062, -122.3321)
        assert jitter(1, center, 10_000) == [center]

    def test_none_center_is_origin(self):
        assert jitter(1, None, 10_000) == [Coordinate.ORIGIN]
        points = jitter(2, None, 10_000)
        for point in points:
            assert distance_between(Coordinate.ORIGIN, point) == pytest.approx(10_000, abs=1.0)

    def test_distance_as_quantity(self):
        assert jitter(3, Coordinate.ORIGIN, Q_(10, 'km')) == jitter(3, Coordinate.ORIGIN, 10_000)

    def test_precision_override(self):
        points = jitter(2, Coordinate.ORIGIN, 10_000, precision=3)
        assert all(len(p.latitude.split(".")[1]) == 3 for p in points)

    def test_geodesic_method(self):
        points = jitter(4, Coordinate.ORIGIN, 10_000, method="geodesic")
        bearings = [bearing_between(Coordinate.ORIGIN, p) for p in points]
        assert bearings == [90, 0, 270, 180]
        for point in points:
            # ellipsoidal placement measured on the sphere
            assert distance_between(Coordinate.ORIGIN, point) == pytest.approx(10_000, rel=0.01)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            jitter(2, Coordinate.ORIGIN, 10_000, method="spiral")

    def test_non_positive_count(self):
        with pytest.raises(CoordinateRangeError):
            jitter(0, Coordinate.ORIGIN, 10_000)
        with pytest.raises(CoordinateRangeError):
            jitter(-3, Coordinate.ORIGIN, 10_000)

    def test_non_positive_distance(self):
        with pytest.raises(CoordinateRangeError):
            jitter(4, Coordinate.ORIGIN, 0)
        with pytest.raises(CoordinateRangeError):
            jitter(4, Coordinate.ORIGIN, -10)

    def test_distance_with_wrong_dimension(self):
        with pytest.raises(CoordinateRangeError):
            jitter(4, Coordinate.ORIGIN, Q_(5, 'second'))


# =============================================================================
# Test Subdivision Bearing
# =============================================================================

class TestSubdivisionBearing:
    """Tests for subdivision_bearing."""

    def test_first_four_are_cardinal(self):
        assert [subdivision_bearing(i) for i in range(4)] == [0.0, 180.0, 90.0, 270.0]

    def test_first_layer(self):
        assert [subdivision_bearing(i) for i in range(4, 8)] == [45.0, 135.0, 225.0, 315.0]

    def test_second_layer(self):
        assert subdivision_bearing(8) == 22.5
        assert subdivision_bearing(9) == 67.5
        assert subdivision_bearing(15) == 337.5

    def test_third_layer(self):
        assert subdivision_bearing(16) == 11.25
        assert subdivision_bearing(31) == 348.75

    def test_layers_never_repeat(self):
        angles = [subdivision_bearing(i) for i in range(64)]
        assert len(set(angles)) == 64
        assert all(0 <= a < 360 for a in angles)

    def test_negative_index(self):
        with pytest.raises(CoordinateRangeError):
            subdivision_bearing(-1)


# =============================================================================
# Test Binary Angular Subdivision
# =============================================================================

class TestBinaryAngularSubdivision:
    """Tests for binary_angular_subdivision."""

    def test_first_point_lies_east(self):
        point = binary_angular_subdivision(0, Coordinate.ORIGIN, 10_000)
        assert distance_between(Coordinate.ORIGIN, point) == pytest.approx(10_000, abs=11)
        assert bearing_between(Coordinate.ORIGIN, point) == 90

    def test_second_point_lies_west(self):
        point = binary_angular_subdivision(1, Coordinate.ORIGIN, 10_000)
        assert bearing_between(Coordinate.ORIGIN, point) == 270

    def test_distinct_points(self):
        center = Coordinate.from_degrees(47.6062, -122.3321)
        points = [binary_angular_subdivision(i, center, 1_000) for i in range(12)]
        assert len(set(points)) == 12
        for point in points:
            assert distance_between(center, point) == pytest.approx(1_000, abs=11)

    def test_none_center_is_origin(self):
        assert binary_angular_subdivision(2, None, 10_000) == \
            binary_angular_subdivision(2, Coordinate.ORIGIN, 10_000)

    def test_custom_config(self):
        config = BisectionConfig(tolerance_m=0.01, max_iterations=1000)
        point = binary_angular_subdivision(5, Coordinate.ORIGIN, 10_000, config=config)
        assert distance_between(Coordinate.ORIGIN, point) == pytest.approx(10_000, abs=1.0)

    def test_unreachable_target_warns(self, caplog):
        """Near the pole the east-west search range is too short."""
        center = Coordinate.from_degrees(89.5, 0)
        with caplog.at_level(logging.WARNING):
            binary_angular_subdivision(0, center, 10_000)
        assert any("did not converge" in r.getMessage() for r in caplog.records)

    def test_negative_index(self):
        with pytest.raises(CoordinateRangeError):
            binary_angular_subdivision(-1, Coordinate.ORIGIN, 10_000)

    def test_non_positive_distance(self):
        with pytest.raises(CoordinateRangeError):
            binary_angular_subdivision(0, Coordinate.ORIGIN, 0)
