"""
Tests for the coordinate value type and normalization.
"""

from dataclasses import FrozenInstanceError

import pytest

from common.errors import CoordinateFormatError
from geocoord.coordinate_models import (
    Coordinate,
    CoordinateFormat,
    DEFAULT_FORMAT,
    WGS84Ellipsoid,
    format_degrees,
    normalize_latitude,
    normalize_longitude,
)


# =============================================================================
# Test Normalization
# =============================================================================

class TestNormalizeLongitude:
    """Tests for normalize_longitude."""

    def test_wraps_past_180(self):
        assert normalize_longitude(370) == 10

    def test_minus_180_becomes_180(self):
        """The range is (-180, 180], so -180 maps to 180."""
        assert normalize_longitude(-180) == 180

    def test_540(self):
        assert normalize_longitude(540) == 180

    def test_negative_wrap(self):
        assert normalize_longitude(-190) == 170

    @pytest.mark.parametrize("lon", [0.0, 0.1, 77.77, 180.0])
    def test_in_range_positive_values_unchanged(self, lon):
        assert normalize_longitude(lon) == lon

    @pytest.mark.parametrize("lon", [-179.9999, -122.3321, -0.5])
    def test_in_range_negative_values_shifted_through_360(self, lon):
        assert normalize_longitude(lon) == (lon + 360) - 360
        assert normalize_longitude(lon) == pytest.approx(lon, abs=1e-12)

    def test_tiny_negative_collapses_to_zero(self):
        assert normalize_longitude(-1e-20) == 0.0

    def test_negative_zero(self):
        assert normalize_longitude(-0.0) == 0.0

    @pytest.mark.parametrize("lon", [-1000.25, -359.5, -180.0, 181.0, 359.99, 721.3, 12345.678])
    def test_idempotent(self, lon):
        once = normalize_longitude(lon)
        assert normalize_longitude(once) == once
        assert -180 < once <= 180


class TestNormalizeLatitude:
    """Tests for normalize_latitude."""

    def test_reflects_at_north_pole(self):
        assert normalize_latitude(95) == 85

    def test_reflects_at_south_pole(self):
        assert normalize_latitude(-100) == -80

    def test_poles_unchanged(self):
        assert normalize_latitude(90) == 90
        assert normalize_latitude(-90) == -90

    def test_half_turn(self):
        assert normalize_latitude(180) == 0

    def test_three_quarter_turn(self):
        assert normalize_latitude(270) == -90

    @pytest.mark.parametrize("lat", [-500.5, -135.0, -90.0, -12.5, 0.0, 47.6062, 95.0, 300.25, 1000.0])
    def test_idempotent(self, lat):
        once = normalize_latitude(lat)
        assert normalize_latitude(once) == once
        assert -90 <= once <= 90


# =============================================================================
# Test Rendering
# =============================================================================

class TestFormatDegrees:
    """Tests for format_degrees."""

    def test_rounds_half_up(self):
        assert format_degrees(0.125, 2) == "0.13"

    def test_negative_half_rounds_away_from_zero(self):
        assert format_degrees(-0.125, 2) == "-0.13"

    def test_negative_zero_has_no_sign(self):
        assert format_degrees(-0.00001, 4) == "0.0000"
        assert format_degrees(-0.0, 2) == "0.00"

    def test_zero_places(self):
        assert format_degrees(47.6, 0) == "48"

    def test_pads_with_zeros(self):
        assert format_degrees(10, 4) == "10.0000"


class TestCoordinateFormat:
    """Tests for the rendering configuration."""

    def test_default_precision_is_four(self):
        assert DEFAULT_FORMAT.precision == 4
        assert CoordinateFormat().precision == 4

    def test_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_FORMAT.precision = 6


# =============================================================================
# Test Coordinate
# =============================================================================

class TestCoordinateFromDegrees:
    """Tests for Coordinate.from_degrees."""

    def test_default_precision(self):
        seattle = Coordinate.from_degrees(47.60621, -122.33207)
        assert seattle.latitude == "47.6062"
        assert seattle.longitude == "-122.3321"

    def test_explicit_precision(self):
        point = Coordinate.from_degrees(0.125, 1.5, precision=2)
        assert point.latitude == "0.13"
        assert point.longitude == "1.50"

    def test_normalizes(self):
        point = Coordinate.from_degrees(95, 370)
        assert point.latitude == "85.0000"
        assert point.longitude == "10.0000"

    def test_negative_half_boundary_renders_after_shift(self):
        point = Coordinate.from_degrees(-27.46045, 0)
        assert point.latitude == "-27.4604"

    def test_to_lat_lon(self):
        assert Coordinate.from_degrees(-33.8688, 151.2093).to_lat_lon() == (-33.8688, 151.2093)


class TestCoordinateSentinels:
    """Tests for the shared coordinate constants."""

    def test_origin(self):
        assert Coordinate.ORIGIN.latitude == "0.0000"
        assert Coordinate.ORIGIN.longitude == "0.0000"

    def test_poles(self):
        assert Coordinate.NORTH_POLE.latitude == "90.0000"
        assert Coordinate.SOUTH_POLE.latitude == "-90.0000"

    def test_invalid(self):
        assert Coordinate.INVALID.latitude is None
        assert not Coordinate.INVALID.is_valid()


class TestCoordinateIsValid:
    """Tests for Coordinate.is_valid and is_valid_not_zero."""

    def test_out_of_range_latitude(self):
        assert not Coordinate("999", "0").is_valid()

    def test_none_components(self):
        assert not Coordinate(None, None).is_valid()
        assert not Coordinate("10", None).is_valid()

    def test_empty_components(self):
        assert not Coordinate("", "10").is_valid()

    def test_unparsable(self):
        assert not Coordinate("abc", "10").is_valid()
        assert not Coordinate("10", "1O.5").is_valid()

    def test_non_finite(self):
        assert not Coordinate("nan", "0").is_valid()
        assert not Coordinate("0", "inf").is_valid()

    def test_boundaries(self):
        assert Coordinate("90", "180").is_valid()
        assert Coordinate("-90", "-180").is_valid()
        assert not Coordinate("90.0001", "0").is_valid()
        assert not Coordinate("0", "-180.0001").is_valid()

    def test_origin_is_valid_but_zero(self):
        assert Coordinate.ORIGIN.is_valid()
        assert not Coordinate.ORIGIN.is_valid_not_zero()

    def test_small_component_counts_as_zero(self):
        assert not Coordinate("0.4", "45").is_valid_not_zero()

    def test_valid_not_zero(self):
        assert Coordinate("47.6", "-122.3").is_valid_not_zero()


class TestCoordinateAccessors:
    """Tests for the numeric and re-rendering accessors."""

    def test_degrees_of_invalid_coordinate_raise(self):
        with pytest.raises(CoordinateFormatError):
            Coordinate("999", "0").latitude_degrees
        with pytest.raises(CoordinateFormatError):
            Coordinate.INVALID.longitude_degrees

    def test_latitude_at(self):
        point = Coordinate("47.60621", "-122.33207")
        assert point.latitude_at(2) == "47.61"
        assert point.longitude_at(0) == "-122"

    def test_negative_digits_return_stored_text(self):
        point = Coordinate("47.60621", "-122.33207")
        assert point.latitude_at(-1) == "47.60621"
        assert point.longitude_at(-1) == "-122.33207"

    def test_str(self):
        assert str(Coordinate("47.6062", "-122.3321")) == "lat:47.6062, lon: -122.3321"

    def test_copy_of(self):
        point = Coordinate("1.5", "2.5")
        copy = Coordinate.copy_of(point)
        assert copy == point

    def test_from_maidenhead(self):
        point = Coordinate.from_maidenhead("CN87vm")
        assert point.latitude_degrees == pytest.approx(47.5208333, abs=1e-6)
        assert point.longitude_degrees == pytest.approx(-122.2083333, abs=1e-6)

    def test_distance_and_bearing(self):
        a = Coordinate.ORIGIN
        b = Coordinate.from_degrees(1, 0)
        assert a.distance_meters_to(b) == pytest.approx(111_195.08, abs=0.1)
        assert a.distance_miles_to(b) == 69
        assert a.bearing_to(b) == 0


# =============================================================================
# Test Ellipsoid
# =============================================================================

class TestWGS84Ellipsoid:
    """Tests for the reference ellipsoid parameters."""

    def test_semi_minor_axis(self):
        assert WGS84Ellipsoid.b == pytest.approx(6_356_752.314245, abs=1e-5)

    def test_eccentricity(self):
        assert WGS84Ellipsoid.e2 == pytest.approx(0.00669437999014, rel=1e-10)
        assert WGS84Ellipsoid.ep2 == pytest.approx(0.00673949674228, rel=1e-10)
