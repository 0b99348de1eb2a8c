"""
Tests for Maidenhead grid locator decoding.
"""

import pytest

from common.errors import CoordinateFormatError
from geocoord.maidenhead import (
    coordinate_from_maidenhead,
    is_valid_maidenhead,
    latitude_from_maidenhead,
    longitude_from_maidenhead,
)


# =============================================================================
# Test Locator Validation
# =============================================================================

class TestIsValidMaidenhead:
    """Tests for is_valid_maidenhead."""

    def test_valid_mixed_case(self):
        assert is_valid_maidenhead("CN87vm")

    def test_valid_upper_and_lower(self):
        assert is_valid_maidenhead("CN87VM")
        assert is_valid_maidenhead("cn87vm")

    def test_too_short(self):
        assert not is_valid_maidenhead("CN8")

    def test_too_long(self):
        assert not is_valid_maidenhead("CN877X9")
        assert not is_valid_maidenhead("CN87vm12")

    def test_field_letter_beyond_r(self):
        assert not is_valid_maidenhead("SN87vm")

    def test_subsquare_letter_beyond_x(self):
        assert not is_valid_maidenhead("CN87vy")

    def test_empty_and_none(self):
        assert not is_valid_maidenhead("")
        assert not is_valid_maidenhead(None)

    def test_non_ascii_digits(self):
        assert not is_valid_maidenhead("CN٨٧vm")


# =============================================================================
# Test Locator Decoding
# =============================================================================

class TestMaidenheadDecoding:
    """Tests for latitude/longitude_from_maidenhead."""

    def test_cn87vm(self):
        """CN87vm is a subsquare in the Seattle area."""
        assert latitude_from_maidenhead("CN87vm") == pytest.approx(47.5208333, abs=1e-6)
        assert longitude_from_maidenhead("CN87vm") == pytest.approx(-122.2083333, abs=1e-6)

    def test_case_insensitive(self):
        assert latitude_from_maidenhead("cn87VM") == latitude_from_maidenhead("CN87vm")
        assert longitude_from_maidenhead("cn87VM") == longitude_from_maidenhead("CN87vm")

    def test_south_west_corner(self):
        """AA00aa is the first subsquare; its center is half a subsquare in."""
        assert latitude_from_maidenhead("AA00aa") == pytest.approx(-90 + 1.25 / 60)
        assert longitude_from_maidenhead("AA00aa") == pytest.approx(-180 + 2.5 / 60)

    def test_north_east_corner(self):
        assert latitude_from_maidenhead("RR99xx") == pytest.approx(90 - 1.25 / 60)
        assert longitude_from_maidenhead("RR99xx") == pytest.approx(180 - 2.5 / 60)

    def test_invalid_raises(self):
        with pytest.raises(CoordinateFormatError, match="not a valid Maidenhead grid string"):
            latitude_from_maidenhead("CN8")
        with pytest.raises(CoordinateFormatError):
            longitude_from_maidenhead("ZZ99zz")


class TestCoordinateFromMaidenhead:
    """Tests for coordinate_from_maidenhead."""

    def test_returns_valid_coordinate(self):
        point = coordinate_from_maidenhead("CN87vm")
        assert point.is_valid()
        assert point.latitude_degrees == latitude_from_maidenhead("CN87vm")
        assert point.longitude_degrees == longitude_from_maidenhead("CN87vm")

    def test_invalid_raises(self):
        with pytest.raises(CoordinateFormatError):
            coordinate_from_maidenhead("bogus!")
