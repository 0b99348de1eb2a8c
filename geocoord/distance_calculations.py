"""
Great-Circle Distance, Bearing and Centroid on a Spherical Earth.

This module provides the distance and direction calculations used for
deduplication, scoring and mapping of reported positions.

Scientific Context
------------------
Domain: Spherical trigonometry
Model: Sphere of mean radius R = 6,371,009 m

Accuracy
--------
The haversine formula on a sphere differs from the WGS84 geodesic by up to
about 0.5%. Results are reported in whole miles and whole degrees, so this
is well inside the reporting resolution.

Centroid Limitation
-------------------
`centroid` averages latitudes and longitudes arithmetically. That is a
planar approximation: it is only meaningful for points that are close
together, and it is wrong for sets that straddle the antimeridian or
surround a pole.

References
----------
- https://en.wikipedia.org/wiki/Great-circle_distance
- https://en.wikipedia.org/wiki/Haversine_formula
- https://www.movable-type.co.uk/scripts/latlong.html (initial bearing)
"""

from typing import Iterable, Optional
import math

import numpy as np
from numpy.typing import NDArray

from common.constants import GeodeticConstants
from common.units import meters_to
from geocoord.coordinate_models import Coordinate


R_METERS = GeodeticConstants.EARTH_MEAN_RADIUS.value
MILES_PER_METER = GeodeticConstants.MILES_PER_METER.value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def distance_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> float:
    """Compute the great-circle distance between two points.

    Parameters
    ----------
    lat1, lon1 : float
        First point in degrees.
    lat2, lon2 : float
        Second point in degrees.

    Returns
    -------
    float
        Distance in meters.

    Notes
    -----
    a = sin²(Δφ/2) + cos φ1 · cos φ2 · sin²(Δλ/2)
    c = 2 · atan2(√a, √(1−a))
    d = R · c
    """
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = np.radians(lon2) - np.radians(lon1)

    a = (
        np.sin(dlat / 2) ** 2 +
        np.cos(lat1_rad) * np.cos(lat2_rad) *
        np.sin(dlon / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(R_METERS * c)


def distance_miles(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> int:
    """Great-circle distance rounded to whole statute miles."""
    return _round_half_up(MILES_PER_METER * distance_meters(lat1, lon1, lat2, lon2))


def distance_kilometers(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> float:
    """Great-circle distance in kilometers."""
    return meters_to(distance_meters(lat1, lon1, lat2, lon2), 'km')


def bearing(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> int:
    """Compute the initial bearing from point 1 to point 2.

    Parameters
    ----------
    lat1, lon1 : float
        Start point in degrees.
    lat2, lon2 : float
        End point in degrees.

    Returns
    -------
    int
        Bearing in whole degrees clockwise from north. Values just below
        360 round up to 360.
    """
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    dlon = np.radians(lon2 - lon1)

    y = np.sin(dlon) * np.cos(lat2_rad)
    x = (
        np.cos(lat1_rad) * np.sin(lat2_rad) -
        np.sin(lat1_rad) * np.cos(lat2_rad) * np.cos(dlon)
    )

    degrees = (float(np.degrees(np.arctan2(y, x))) + 360) % 360
    return _round_half_up(degrees)


def distance_between(p1: Coordinate, p2: Coordinate) -> float:
    """Distance in meters between two coordinates."""
    return distance_meters(
        p1.latitude_degrees, p1.longitude_degrees,
        p2.latitude_degrees, p2.longitude_degrees
    )


def distance_miles_between(p1: Coordinate, p2: Coordinate) -> int:
    """Distance in whole miles between two coordinates."""
    return distance_miles(
        p1.latitude_degrees, p1.longitude_degrees,
        p2.latitude_degrees, p2.longitude_degrees
    )


def bearing_between(p1: Coordinate, p2: Coordinate) -> int:
    """Initial bearing in whole degrees from `p1` to `p2`."""
    return bearing(
        p1.latitude_degrees, p1.longitude_degrees,
        p2.latitude_degrees, p2.longitude_degrees
    )


def centroid(points: Optional[Iterable[Optional[Coordinate]]]) -> Coordinate:
    """Compute the planar centroid of a set of coordinates.

    Parameters
    ----------
    points : iterable of Coordinate
        Coordinates to average. ``None`` entries are skipped.

    Returns
    -------
    Coordinate
        Mean latitude and mean longitude at the default precision.
        An empty input gives the origin; a single point is returned as is.

    Notes
    -----
    This is an arithmetic mean of degrees, not a spherical centroid. Use it
    only for points a few hundred kilometers apart at most, away from the
    antimeridian and the poles.
    """
    if points is None:
        return Coordinate.ORIGIN

    points = list(points)
    if len(points) == 0:
        return Coordinate.ORIGIN

    if len(points) == 1 and points[0] is not None:
        return Coordinate.copy_of(points[0])

    present = [p for p in points if p is not None]
    if not present:
        return Coordinate.ORIGIN

    lats = np.array([p.latitude_degrees for p in present], dtype=np.float64)
    lons = np.array([p.longitude_degrees for p in present], dtype=np.float64)

    return Coordinate.from_degrees(float(lats.sum() / len(present)), float(lons.sum() / len(present)))


def distance_meters_batch(
    lat1: NDArray[np.float64],
    lon1: NDArray[np.float64],
    lat2: NDArray[np.float64],
    lon2: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Compute great-circle distances for arrays of point pairs.

    This is the vectorized version of `distance_meters`.

    Parameters
    ----------
    lat1, lon1 : ndarray
        First points in degrees.
    lat2, lon2 : ndarray
        Second points in degrees.

    Returns
    -------
    ndarray
        Distances in meters.

    Notes
    -----
    Inputs broadcast, so one point against many is a (1,) array against
    an (N,) array.
    """
    lat1_rad = np.radians(np.asarray(lat1, dtype=np.float64))
    lat2_rad = np.radians(np.asarray(lat2, dtype=np.float64))
    dlat = lat2_rad - lat1_rad
    dlon = np.radians(np.asarray(lon2, dtype=np.float64)) - np.radians(np.asarray(lon1, dtype=np.float64))

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return np.asarray(R_METERS * c, dtype=np.float64)
