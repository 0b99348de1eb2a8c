"""
Coordinate Models for Human-Entered Positions.

This module defines the canonical coordinate value used by every other
part of the engine, the normalization rules that bring arbitrary degree
values into range, and the reference ellipsoid consumed by the UTM
projection engine.

Representation
--------------
The natural type of a coordinate component is the decimal *string*, not
the double. Positions arrive as text from exercise messages and leave as
text in CSV files, so the string is what gets stored; the double is parsed
from it on demand. The default rendering precision is 4 decimal digits,
about 11 m at the equator.

Normalization
-------------
Longitudes are reduced into (-180, 180] with a centered modulus.
Latitudes are reduced by the same modulus and then *reflected* at the
poles, so 95 degrees becomes 85 degrees rather than wrapping to -85.

References
----------
- https://en.wikipedia.org/wiki/Decimal_degrees
- NIMA TR8350.2: WGS84 parameters
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
import math
from typing import ClassVar, Optional, Tuple

import numpy as np

from common.constants import GeodeticConstants
from common.errors import CoordinateFormatError
from common.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = f(2 - f)
    ep2 : float
        Second eccentricity squared: e'² = e² / (1 - e²)
    """
    a: float
    f: float
    name: str

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)


# WGS84 ellipsoid - the only datum supported by the engine
WGS84Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.EARTH_SEMI_MAJOR_AXIS.value,
    f=GeodeticConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


@dataclass(frozen=True)
class CoordinateFormat:
    """Rendering configuration for coordinate strings.

    Attributes
    ----------
    precision : int
        Number of decimal digits kept when a double is rendered to the
        stored string. Rounding is half-up.
    """
    precision: int = 4


# Decided once, never mutated; pass ``precision=`` to override per call.
DEFAULT_FORMAT = CoordinateFormat()


def _centered_modulus(dividend: float, divisor: float) -> float:
    """Modulus centered on zero: result in (-divisor/2, divisor/2].

    Zero and negative remainders are first shifted up by a full divisor,
    so negative inputs come back on the binary grid of the shifted value.
    """
    ret = float(np.fmod(dividend, divisor))
    if ret <= 0:
        ret += divisor
    if ret > divisor / 2:
        ret -= divisor
    return ret


def normalize_latitude(lat: float) -> float:
    """Bring a latitude into [-90, 90], reflecting at the poles.

    Parameters
    ----------
    lat : float
        Latitude in degrees, any value.

    Returns
    -------
    float
        Latitude in degrees within [-90, 90].

    Examples
    --------
    >>> normalize_latitude(95)
    85.0
    >>> normalize_latitude(-100)
    -80.0
    """
    lat = _centered_modulus(lat, 360)
    if lat < -90:
        lat = -180 - lat
    elif lat > 90:
        lat = 180 - lat
    return lat


def normalize_longitude(lon: float) -> float:
    """Bring a longitude into (-180, 180].

    Examples
    --------
    >>> normalize_longitude(370)
    10.0
    >>> normalize_longitude(-180)
    180.0
    """
    return _centered_modulus(lon, 360)


def format_degrees(value: float, places: int) -> str:
    """Render a double with a fixed number of decimal places, half-up.

    The exact binary value of the double is rounded, not its shortest
    repr. Negative zero is rendered without a sign.

    Examples
    --------
    >>> format_degrees(0.125, 2)
    '0.13'
    >>> format_degrees(-0.00001, 4)
    '0.0000'
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return format(rounded, 'f')


def _parse_component(text: Optional[str]) -> Optional[float]:
    """Parse a stored component, returning None when it is not a finite number."""
    if text is None or len(text) == 0:
        return None
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees.

    Attributes
    ----------
    latitude : str or None
        Latitude as a decimal string. Positive north.
    longitude : str or None
        Longitude as a decimal string. Positive east.

    Notes
    -----
    Construct from doubles with `from_degrees`, which normalizes and
    renders at the requested precision. Constructing directly from
    strings stores them verbatim, so validity must be checked with
    `is_valid` before numeric use.

    Examples
    --------
    >>> seattle = Coordinate.from_degrees(47.60621, -122.33207)
    >>> seattle.latitude, seattle.longitude
    ('47.6062', '-122.3321')
    >>> Coordinate("999", "0").is_valid()
    False
    """
    latitude: Optional[str]
    longitude: Optional[str]

    ORIGIN: ClassVar['Coordinate']
    NORTH_POLE: ClassVar['Coordinate']
    SOUTH_POLE: ClassVar['Coordinate']
    INVALID: ClassVar['Coordinate']

    def __str__(self) -> str:
        return f"lat:{self.latitude}, lon: {self.longitude}"

    @classmethod
    def from_degrees(
        cls,
        lat_deg: float,
        lon_deg: float,
        precision: Optional[int] = None
    ) -> 'Coordinate':
        """Create a coordinate from doubles, normalizing both components.

        Parameters
        ----------
        lat_deg : float
            Latitude in degrees, any value.
        lon_deg : float
            Longitude in degrees, any value.
        precision : int, optional
            Decimal digits to keep. Defaults to ``DEFAULT_FORMAT.precision``.

        Returns
        -------
        Coordinate
            Normalized coordinate.
        """
        if precision is None:
            precision = DEFAULT_FORMAT.precision
        return cls(
            latitude=format_degrees(normalize_latitude(lat_deg), precision),
            longitude=format_degrees(normalize_longitude(lon_deg), precision)
        )

    @classmethod
    def from_maidenhead(cls, locator: str) -> 'Coordinate':
        """Create a coordinate at the center of a 6-character locator."""
        from geocoord.maidenhead import coordinate_from_maidenhead

        return coordinate_from_maidenhead(locator)

    @classmethod
    def copy_of(cls, other: 'Coordinate') -> 'Coordinate':
        return cls(latitude=other.latitude, longitude=other.longitude)

    def is_valid(self) -> bool:
        """Check that both components parse and lie within range.

        Never raises. Unparsable components are logged.
        """
        if self.latitude is None or self.longitude is None:
            return False

        if len(self.latitude) == 0 or len(self.longitude) == 0:
            return False

        lat = _parse_component(self.latitude)
        if lat is None:
            logger.error(f"could not parse latitude from: {self.latitude}")
            return False
        if abs(lat) > 90:
            return False

        lon = _parse_component(self.longitude)
        if lon is None:
            logger.error(f"could not parse longitude from: {self.longitude}")
            return False
        if abs(lon) > 180:
            return False

        return True

    def is_valid_not_zero(self) -> bool:
        """Valid, and neither component rounds to zero whole degrees."""
        return (
            self.is_valid()
            and self.latitude_at(0) != "0"
            and self.longitude_at(0) != "0"
        )

    @property
    def latitude_degrees(self) -> float:
        """Latitude as a double.

        Raises
        ------
        CoordinateFormatError
            If the coordinate is not valid.
        """
        self._require_valid()
        return float(self.latitude)

    @property
    def longitude_degrees(self) -> float:
        """Longitude as a double.

        Raises
        ------
        CoordinateFormatError
            If the coordinate is not valid.
        """
        self._require_valid()
        return float(self.longitude)

    def to_lat_lon(self) -> Tuple[float, float]:
        """Return (latitude, longitude) as doubles."""
        return self.latitude_degrees, self.longitude_degrees

    def latitude_at(self, decimal_digits: int) -> Optional[str]:
        """Latitude rendered at another precision.

        A negative digit count returns the stored string unchanged.
        """
        if decimal_digits < 0:
            return self.latitude
        return format_degrees(normalize_latitude(self.latitude_degrees), decimal_digits)

    def longitude_at(self, decimal_digits: int) -> Optional[str]:
        """Longitude rendered at another precision.

        A negative digit count returns the stored string unchanged.
        """
        if decimal_digits < 0:
            return self.longitude
        return format_degrees(normalize_longitude(self.longitude_degrees), decimal_digits)

    def distance_meters_to(self, other: 'Coordinate') -> float:
        from geocoord.distance_calculations import distance_between

        return distance_between(self, other)

    def distance_miles_to(self, other: 'Coordinate') -> int:
        from geocoord.distance_calculations import distance_miles_between

        return distance_miles_between(self, other)

    def bearing_to(self, other: 'Coordinate') -> int:
        from geocoord.distance_calculations import bearing_between

        return bearing_between(self, other)

    def _require_valid(self) -> None:
        if not self.is_valid():
            raise CoordinateFormatError(
                f"Coordinate ({self}) is not a valid latitude/longitude pair"
            )


Coordinate.ORIGIN = Coordinate.from_degrees(0, 0)
Coordinate.NORTH_POLE = Coordinate.from_degrees(90, 0)
Coordinate.SOUTH_POLE = Coordinate.from_degrees(-90, 0)
Coordinate.INVALID = Coordinate(latitude=None, longitude=None)
