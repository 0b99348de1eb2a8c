"""
Geodetic Constants for the Coordinate Engine.

This module provides the constants used by the coordinate engine together
with their uncertainty bounds and sources. All constants are in SI units
unless the unit field says otherwise.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM grid parameters: DMA TM 8358.2, The Universal Grids
- Great-circle mean radius: https://en.wikipedia.org/wiki/Great-circle_distance
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of constants used throughout the engine.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the reference ellipsoid used by the UTM
    projection engine.

    Spherical Earth
    ---------------
    Great-circle geometry (distance, bearing, synthetic points) uses a
    sphere of mean radius, not the ellipsoid.

    UTM Grid
    --------
    Scale factor, false origin and latitude limits of the UTM grid.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )

    # =========================================================================
    # Spherical Earth
    # =========================================================================

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_009.0,
        uncertainty=1.0,
        unit="m",
        source="IUGG mean radius R1 = (2a + b) / 3",
        description="Mean radius used by haversine distance and bearing"
    )

    MILES_PER_METER: Final[Constant] = Constant(
        value=0.000621371,
        uncertainty=0.0,
        unit="mi/m",
        source="International mile, truncated",
        description="Conversion factor from meters to statute miles"
    )

    # =========================================================================
    # UTM Grid
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor k0 on the central meridian"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False easting added to every UTM easting"
    )

    UTM_FALSE_NORTHING_SOUTH: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False northing added to southern hemisphere northings"
    )

    UTM_MIN_LATITUDE: Final[Constant] = Constant(
        value=-80.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Southern limit of the UTM grid (UPS beyond)"
    )

    UTM_MAX_LATITUDE: Final[Constant] = Constant(
        value=84.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Northern limit of the UTM grid (UPS beyond)"
    )

    UTM_ZONE_WIDTH: Final[Constant] = Constant(
        value=6.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Longitudinal width of one UTM zone"
    )

    MGRS_SQUARE_SIZE: Final[Constant] = Constant(
        value=100_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.1",
        description="Side of one MGRS 100 km grid square"
    )

    MGRS_NORTHING_CYCLE: Final[Constant] = Constant(
        value=2_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.1",
        description="Northing after which the 20 row letters repeat"
    )
