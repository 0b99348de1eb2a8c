"""
Synthetic Point Generation Around a Center.

Downstream mapping needs placeholder positions: when several reports share
one location, or a report has no usable location, each gets a distinct
point a fixed distance from a center. This module generates such points.

- `jitter` places ``n`` points evenly around a circle.
- `binary_angular_subdivision` places the point for one integer index,
  so that indices 0..3 take the four cardinal directions and each later
  layer halves the angular gaps left by the layers before it.

Placement
---------
The bearing θ is measured counterclockwise from east. A scalar step ``t``
moves the trial point to ``(lat + t·sin θ, lon + t·cos θ)`` in degrees,
and bisection on ``t`` finds the step whose great-circle distance back to
the center matches the target. Degree deltas are treated as locally
proportional to the step, which holds at sub-continental distances.

``method="geodesic"`` instead solves the WGS84 direct problem in closed
form with `pyproj`. It is exact at any distance but gives slightly
different points (ellipsoid versus sphere), so bisection stays the default.

Known Limitation
----------------
The subdivision search is bounded above by ``distance / 10000`` degrees.
East-west placements poleward of about 85° cannot reach the target inside
that bound, and at thousands of kilometers the range spans wrapped
longitudes. The search then stops at its iteration cap and logs a warning.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import math

import numpy as np
from pyproj import Geod

from common.constants import GeodeticConstants
from common.errors import CoordinateRangeError
from common.logging_config import get_logger
from common.units import Distance, to_meters
from geocoord.coordinate_models import (
    Coordinate,
    CoordinateFormat,
    normalize_latitude,
    normalize_longitude,
)
from geocoord.distance_calculations import distance_meters

logger = get_logger(__name__)

# Create the geodesic calculator for WGS84
_wgs84_geod = Geod(ellps='WGS84')

R_METERS = GeodeticConstants.EARTH_MEAN_RADIUS.value
HALF_CIRCUMFERENCE_M = math.pi * R_METERS

# Sub-meter placement needs more digits than the 4-digit default.
SYNTHETIC_FORMAT = CoordinateFormat(precision=7)

_CARDINAL_BEARINGS = (0.0, 180.0, 90.0, 270.0)

METHOD_BISECTION = "bisection"
METHOD_GEODESIC = "geodesic"


@dataclass(frozen=True)
class BisectionConfig:
    """Configuration for the distance search.

    Attributes
    ----------
    tolerance_m : float
        Stop when the measured distance is within this many meters of
        the target.
    max_iterations : int
        Hard cap on bisection steps.
    upper_bound_per_meter : float, optional
        Upper end of the step range, in degrees, as a multiple of the
        target distance in meters.
        ``None`` uses π·R, half the circumference of the sphere, which
        is 180 degrees of arc.
    """
    tolerance_m: float = 0.01
    max_iterations: int = 1000
    upper_bound_per_meter: Optional[float] = None

    def upper_bound(self, distance_m: float) -> float:
        if self.upper_bound_per_meter is None:
            return float(np.degrees(HALF_CIRCUMFERENCE_M / R_METERS))
        return distance_m * self.upper_bound_per_meter


JITTER_SEARCH = BisectionConfig(tolerance_m=0.01, max_iterations=1000)
SUBDIVISION_SEARCH = BisectionConfig(
    tolerance_m=10.0,
    max_iterations=1000,
    upper_bound_per_meter=1.0 / 10000
)


def _check_distance(distance: Distance) -> float:
    distance_m = to_meters(distance)
    if not distance_m > 0:
        raise CoordinateRangeError(f"non-positive distance: {distance_m}")
    return distance_m


def _locate_by_bisection(
    center_lat: float,
    center_lon: float,
    theta_deg: float,
    distance_m: float,
    config: BisectionConfig
) -> Tuple[float, float]:
    """Find the point at `distance_m` from the center along `theta_deg`.

    Returns
    -------
    Tuple[float, float]
        (latitude, longitude) in degrees, normalized.
    """
    theta_rad = np.radians(theta_deg)
    cos_theta = float(np.cos(theta_rad))
    sin_theta = float(np.sin(theta_rad))

    lo = 0.0
    hi = config.upper_bound(distance_m)
    lat = center_lat
    lon = center_lon
    delta = distance_m

    for iteration in range(1, config.max_iterations + 1):
        mid = (lo + hi) / 2
        lat = normalize_latitude(center_lat + mid * sin_theta)
        lon = normalize_longitude(center_lon + mid * cos_theta)

        computed = distance_meters(center_lat, center_lon, lat, lon)
        delta = distance_m - computed
        if abs(delta) <= config.tolerance_m:
            logger.debug(
                f"converged at theta={theta_deg:.4f} after {iteration} iterations, "
                f"delta={delta:.6f} m"
            )
            return lat, lon

        if computed < distance_m:
            lo = mid
        else:
            hi = mid

    logger.warning(
        f"distance search did not converge for theta={theta_deg:.4f}, "
        f"distance={distance_m} m: residual {delta:.3f} m after "
        f"{config.max_iterations} iterations"
    )
    return lat, lon


def _locate_by_geodesic(
    center_lat: float,
    center_lon: float,
    theta_deg: float,
    distance_m: float
) -> Tuple[float, float]:
    # theta counts counterclockwise from east; azimuth clockwise from north
    azimuth_deg = 90.0 - theta_deg
    lon2, lat2, _ = _wgs84_geod.fwd(center_lon, center_lat, azimuth_deg, distance_m)
    return normalize_latitude(float(lat2)), normalize_longitude(float(lon2))


def _locate(
    center: Coordinate,
    theta_deg: float,
    distance_m: float,
    config: BisectionConfig,
    method: str,
    precision: int
) -> Coordinate:
    center_lat, center_lon = center.to_lat_lon()
    if method == METHOD_BISECTION:
        lat, lon = _locate_by_bisection(center_lat, center_lon, theta_deg, distance_m, config)
    elif method == METHOD_GEODESIC:
        lat, lon = _locate_by_geodesic(center_lat, center_lon, theta_deg, distance_m)
    else:
        raise ValueError(f"Unknown placement method: {method}")
    return Coordinate.from_degrees(lat, lon, precision=precision)


def jitter(
    n: int,
    center: Optional[Coordinate],
    distance: Distance,
    precision: Optional[int] = None,
    config: BisectionConfig = JITTER_SEARCH,
    method: str = METHOD_BISECTION
) -> List[Coordinate]:
    """Return `n` points evenly spaced at a distance around a center.

    Parameters
    ----------
    n : int
        Number of points, at least 1.
    center : Coordinate, optional
        Center of the circle. ``None`` means the origin.
    distance : float or pint.Quantity
        Radius of the circle; bare numbers are meters. Must be positive.
    precision : int, optional
        Decimal digits of the returned coordinates
        (default ``SYNTHETIC_FORMAT.precision``).
    config : BisectionConfig
        Search tolerance and iteration cap.
    method : str
        ``"bisection"`` (default) or ``"geodesic"``.

    Returns
    -------
    List[Coordinate]
        Point ``i`` lies along θ = 360·i/n. With ``n == 1`` the center
        itself is returned.

    Raises
    ------
    CoordinateRangeError
        If `n` < 1 or `distance` <= 0.

    Examples
    --------
    >>> points = jitter(4, Coordinate.ORIGIN, 10_000)
    >>> len(points)
    4
    """
    if n <= 0:
        raise CoordinateRangeError(f"non-positive number of points: {n}")
    distance_m = _check_distance(distance)

    if center is None:
        center = Coordinate.ORIGIN

    if n == 1:
        return [center]

    if precision is None:
        precision = SYNTHETIC_FORMAT.precision

    return [
        _locate(center, 360.0 * i / n, distance_m, config, method, precision)
        for i in range(n)
    ]


def subdivision_bearing(index: int) -> float:
    """Map an index to an angle by layered binary subdivision of the circle.

    Indices 0..3 give 0, 180, 90 and 270 degrees. Layer 1 holds the next 4
    indices, layer L > 1 holds 4·2^(L-1); within a layer the angles sit at
    the midpoints of equal sectors.

    Examples
    --------
    >>> [subdivision_bearing(i) for i in range(8)]
    [0.0, 180.0, 90.0, 270.0, 45.0, 135.0, 225.0, 315.0]
    >>> subdivision_bearing(8)
    22.5
    """
    if index < 0:
        raise CoordinateRangeError(f"negative subdivision index: {index}")
    if index < len(_CARDINAL_BEARINGS):
        return _CARDINAL_BEARINGS[index]

    layer = 1
    start = 4
    count = 4
    while index >= start + count:
        start += count
        layer += 1
        count = 4 * 2 ** (layer - 1)

    step = 360.0 / count
    position = index - start
    return step / 2 + position * step


def binary_angular_subdivision(
    index: int,
    center: Optional[Coordinate],
    distance: Distance,
    precision: Optional[int] = None,
    config: BisectionConfig = SUBDIVISION_SEARCH,
    method: str = METHOD_BISECTION
) -> Coordinate:
    """Return the synthetic point for one index around a center.

    Parameters
    ----------
    index : int
        Non-negative point index; see `subdivision_bearing`.
    center : Coordinate, optional
        Center point. ``None`` means the origin.
    distance : float or pint.Quantity
        Distance from the center; bare numbers are meters. Must be positive.
    precision : int, optional
        Decimal digits of the returned coordinate.
    config : BisectionConfig
        Search parameters (default: 10 m tolerance, upper bound of
        distance/10000 degrees).
    method : str
        ``"bisection"`` (default) or ``"geodesic"``.

    Raises
    ------
    CoordinateRangeError
        If `index` < 0 or `distance` <= 0.
    """
    theta_deg = subdivision_bearing(index)
    distance_m = _check_distance(distance)

    if center is None:
        center = Coordinate.ORIGIN

    if precision is None:
        precision = SYNTHETIC_FORMAT.precision

    return _locate(center, theta_deg, distance_m, config, method, precision)
