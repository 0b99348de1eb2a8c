"""
Transverse Mercator and UTM on the WGS84 Ellipsoid.

This module provides the Universal Transverse Mercator projection used
by the MGRS encoder and decoder.

Scientific Context
------------------
Domain: Cartography, mathematical geodesy
Model: Transverse Mercator on the WGS84 ellipsoid, truncated power series

UTM divides the Earth into 60 zones of 6° longitude. Each zone is a
Transverse Mercator projection centered on its own meridian, scaled by
k0 = 0.9996 there, with a false easting of 500 km and, in the southern
hemisphere, a false northing of 10,000 km.

Accuracy
--------
The series below are accurate to well under a millimeter within a zone
and degrade slowly beyond it. Compare against PROJ with
`TransverseMercator.reference_transformer`.

Known Limitations
-----------------
1. Only latitudes in [-80°, 84°] are supported; the polar UPS grids are not.
2. The Norway and Svalbard zone exceptions are not applied.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395,
  pp. 60-64.
- Veness, C. Geodesy functions, https://github.com/chrisveness/geodesy
"""

from dataclasses import dataclass
from typing import Tuple
import math

import numpy as np
from pyproj import CRS, Transformer

from common.constants import GeodeticConstants
from common.errors import CoordinateFormatError, CoordinateRangeError, UnsupportedRegionError
from geocoord.coordinate_models import (
    Coordinate,
    EllipsoidParameters,
    WGS84Ellipsoid,
    normalize_longitude,
)


UTM_SCALE_FACTOR = GeodeticConstants.UTM_SCALE_FACTOR.value
UTM_FALSE_EASTING = GeodeticConstants.UTM_FALSE_EASTING.value
UTM_FALSE_NORTHING_SOUTH = GeodeticConstants.UTM_FALSE_NORTHING_SOUTH.value
UTM_MIN_LATITUDE = GeodeticConstants.UTM_MIN_LATITUDE.value
UTM_MAX_LATITUDE = GeodeticConstants.UTM_MAX_LATITUDE.value
UTM_ZONE_WIDTH = GeodeticConstants.UTM_ZONE_WIDTH.value

HEMISPHERES = ("N", "S")


def meridian_arc(
    lat_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the meridian arc length from the equator.

    Parameters
    ----------
    lat_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Distance along the meridian in meters, negative south of the equator.

    Notes
    -----
    Series in e² truncated after the e⁶ terms (Snyder eq. 3-21).
    """
    e2 = ellipsoid.e2
    e4 = e2 * e2
    e6 = e4 * e2

    return ellipsoid.a * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * lat_rad
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * np.sin(2 * lat_rad)
        + (15 * e4 / 256 + 45 * e6 / 1024) * np.sin(4 * lat_rad)
        - (35 * e6 / 3072) * np.sin(6 * lat_rad)
    )


def utm_zone(lon_deg: float) -> int:
    """Return the UTM zone number (1-60) for a longitude.

    The longitude is normalized first. +180 is treated as -180 and so
    falls in zone 1.

    Examples
    --------
    >>> utm_zone(-122.3321)
    10
    >>> utm_zone(180)
    1
    """
    lon_deg = _zone_longitude(lon_deg)
    return int(math.floor((lon_deg + 180) / UTM_ZONE_WIDTH)) + 1


def central_meridian(zone: int) -> float:
    """Longitude of a zone's central meridian in degrees.

    Raises
    ------
    CoordinateRangeError
        If `zone` is outside 1..60.
    """
    _check_zone(zone)
    return -183.0 + UTM_ZONE_WIDTH * zone


def _zone_longitude(lon_deg: float) -> float:
    lon_deg = normalize_longitude(lon_deg)
    if lon_deg == 180:
        lon_deg = -180.0
    return lon_deg


def _check_zone(zone: int) -> None:
    if not 1 <= zone <= 60:
        raise CoordinateRangeError(f"UTM zone must be between 1 and 60, got {zone}")


class TransverseMercator:
    """Transverse Mercator projection.

    A conformal (angle-preserving) projection suitable for regions
    that extend primarily north-south. This is the basis for UTM.

    Parameters
    ----------
    central_meridian_deg : float
        Central meridian longitude in degrees.
    scale_factor : float
        Scale factor at central meridian (default: 0.9996 for UTM).
    false_easting : float
        False easting in meters (default: 500000 for UTM).
    false_northing : float
        False northing in meters (default: 0 for northern hemisphere).
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Notes
    -----
    Distortion increases with distance from the central meridian.
    Typically valid within 3° of the central meridian for high accuracy.
    """

    def __init__(
        self,
        central_meridian_deg: float,
        scale_factor: float = UTM_SCALE_FACTOR,
        false_easting: float = UTM_FALSE_EASTING,
        false_northing: float = 0.0,
        ellipsoid: EllipsoidParameters = WGS84Ellipsoid
    ):
        self._central_meridian = central_meridian_deg
        self._scale_factor = scale_factor
        self._false_easting = false_easting
        self._false_northing = false_northing
        self._ellipsoid = ellipsoid

        self._proj4 = (
            f"+proj=tmerc +lat_0=0 +lon_0={central_meridian_deg} "
            f"+k={scale_factor} +x_0={false_easting} +y_0={false_northing} "
            f"+a={ellipsoid.a} +rf={1 / ellipsoid.f} +units=m +no_defs"
        )

    @classmethod
    def for_utm_zone(cls, zone: int, hemisphere: str = "N") -> 'TransverseMercator':
        """Projection for one UTM zone and hemisphere."""
        false_northing = UTM_FALSE_NORTHING_SOUTH if hemisphere == "S" else 0.0
        return cls(central_meridian(zone), false_northing=false_northing)

    @property
    def name(self) -> str:
        return f"Transverse Mercator (CM={self._central_meridian}°)"

    @property
    def central_meridian_deg(self) -> float:
        return self._central_meridian

    @property
    def proj4_string(self) -> str:
        return self._proj4

    def reference_transformer(self) -> Transformer:
        """PROJ transformer from WGS84 (lon, lat) to this projection's (x, y)."""
        crs_geo = CRS.from_epsg(4326)  # WGS84
        crs_proj = CRS.from_proj4(self._proj4)
        return Transformer.from_crs(crs_geo, crs_proj, always_xy=True)

    def to_projected(self, lat_deg: float, lon_deg: float) -> Tuple[float, float]:
        """Transform geodetic coordinates to projected coordinates.

        Parameters
        ----------
        lat_deg, lon_deg : float
            Geodetic coordinates in degrees.

        Returns
        -------
        Tuple[float, float]
            (x, y) projected coordinates in meters.
        """
        a = self._ellipsoid.a
        e2 = self._ellipsoid.e2
        ep2 = self._ellipsoid.ep2
        k0 = self._scale_factor

        lat = np.radians(lat_deg)
        dlon = np.radians(lon_deg) - np.radians(self._central_meridian)

        sin_lat = np.sin(lat)
        cos_lat = np.cos(lat)
        tan_lat = np.tan(lat)

        n = a / np.sqrt(1 - e2 * sin_lat * sin_lat)
        t = tan_lat * tan_lat
        c = ep2 * cos_lat * cos_lat
        A = dlon * cos_lat
        m = meridian_arc(lat, self._ellipsoid)

        x = k0 * n * (
            A
            + (1 - t + c) * A ** 3 / 6
            + (5 - 18 * t + t * t + 72 * c - 58 * ep2) * A ** 5 / 120
        )
        y = k0 * (
            m + n * tan_lat * (
                A * A / 2
                + (5 - t + 9 * c + 4 * c * c) * A ** 4 / 24
                + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * A ** 6 / 720
            )
        )

        return float(x + self._false_easting), float(y + self._false_northing)

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        """Transform projected coordinates to geodetic.

        Parameters
        ----------
        x, y : float
            Projected coordinates in meters.

        Returns
        -------
        Tuple[float, float]
            (lat_deg, lon_deg) geodetic coordinates in degrees.
        """
        a = self._ellipsoid.a
        e2 = self._ellipsoid.e2
        ep2 = self._ellipsoid.ep2
        k0 = self._scale_factor

        x = x - self._false_easting
        y = y - self._false_northing

        # Footpoint latitude
        m = y / k0
        mu = m / (a * (1 - e2 / 4 - 3 * e2 * e2 / 64 - 5 * e2 ** 3 / 256))

        e1 = (1 - np.sqrt(1 - e2)) / (1 + np.sqrt(1 - e2))
        j1 = 3 * e1 / 2 - 27 * e1 ** 3 / 32
        j2 = 21 * e1 * e1 / 16 - 55 * e1 ** 4 / 32
        j3 = 151 * e1 ** 3 / 96
        j4 = 1097 * e1 ** 4 / 512

        fp = (
            mu
            + j1 * np.sin(2 * mu)
            + j2 * np.sin(4 * mu)
            + j3 * np.sin(6 * mu)
            + j4 * np.sin(8 * mu)
        )

        sin_fp = np.sin(fp)
        cos_fp = np.cos(fp)
        tan_fp = np.tan(fp)

        c1 = ep2 * cos_fp * cos_fp
        t1 = tan_fp * tan_fp
        n1 = a / np.sqrt(1 - e2 * sin_fp * sin_fp)
        r1 = a * (1 - e2) / (1 - e2 * sin_fp * sin_fp) ** 1.5
        d = x / (n1 * k0)

        lat = fp - (n1 * tan_fp / r1) * (
            d * d / 2
            - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * ep2) * d ** 4 / 24
            + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * ep2 - 3 * c1 * c1) * d ** 6 / 720
        )
        dlon = (
            d
            - (1 + 2 * t1 + c1) * d ** 3 / 6
            + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * ep2 + 24 * t1 * t1) * d ** 5 / 120
        ) / cos_fp

        return float(np.degrees(lat)), float(np.degrees(dlon) + self._central_meridian)


@dataclass(frozen=True)
class UtmCoordinate:
    """A position on the UTM grid.

    Attributes
    ----------
    zone : int
        Zone number, 1 to 60.
    hemisphere : str
        'N' or 'S'. Southern northings include the 10,000 km false northing.
    easting : float
        Easting in meters, including the 500 km false easting.
    northing : float
        Northing in meters.
    """
    zone: int
    hemisphere: str
    easting: float
    northing: float

    def __post_init__(self):
        _check_zone(self.zone)
        if self.hemisphere not in HEMISPHERES:
            raise CoordinateFormatError(
                f"UTM hemisphere must be 'N' or 'S', got {self.hemisphere!r}"
            )

    def __str__(self) -> str:
        return f"{self.zone} {self.hemisphere} {self.easting:.3f} {self.northing:.3f}"

    @classmethod
    def from_lat_lon(cls, lat_deg: float, lon_deg: float) -> 'UtmCoordinate':
        """Project a latitude/longitude into its UTM zone.

        Parameters
        ----------
        lat_deg : float
            Latitude in degrees, within [-80, 84].
        lon_deg : float
            Longitude in degrees; normalized before the zone is chosen.

        Returns
        -------
        UtmCoordinate
            Hemisphere is 'S' exactly when the latitude is negative.

        Raises
        ------
        UnsupportedRegionError
            If the latitude is outside [-80, 84].

        Examples
        --------
        >>> utm = UtmCoordinate.from_lat_lon(47.6062, -122.3321)
        >>> utm.zone, utm.hemisphere
        (10, 'N')
        """
        if not UTM_MIN_LATITUDE <= lat_deg <= UTM_MAX_LATITUDE:
            raise UnsupportedRegionError(
                f"Latitude {lat_deg} is outside the UTM range "
                f"[{UTM_MIN_LATITUDE:g}, {UTM_MAX_LATITUDE:g}]"
            )

        lon_deg = _zone_longitude(lon_deg)
        zone = utm_zone(lon_deg)
        hemisphere = "S" if lat_deg < 0 else "N"

        projection = TransverseMercator.for_utm_zone(zone, hemisphere)
        easting, northing = projection.to_projected(lat_deg, lon_deg)

        return cls(zone=zone, hemisphere=hemisphere, easting=easting, northing=northing)

    def to_lat_lon(self) -> Tuple[float, float]:
        """Return (latitude, longitude) in degrees."""
        projection = TransverseMercator.for_utm_zone(self.zone, self.hemisphere)
        return projection.to_geodetic(self.easting, self.northing)

    def to_coordinate(self, precision: int = 7) -> Coordinate:
        """Inverse-project to a `Coordinate` rendered at `precision` digits."""
        lat, lon = self.to_lat_lon()
        return Coordinate.from_degrees(lat, lon, precision=precision)
