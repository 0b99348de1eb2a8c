"""
Geospatial Coordinate Engine.

All position handling for the message pipeline goes through this package:
coordinates arrive as human-entered text and leave as decimal strings or
grid references.

This module provides:
- The canonical decimal-string coordinate with normalization and validation
- Maidenhead locator decoding and ad hoc degree-minute parsing
- Great-circle distance, bearing and centroid on a spherical Earth
- Synthetic points around a center (jitter, binary angular subdivision)
- WGS84 UTM projection and MGRS encoding/decoding
"""

from geocoord.coordinate_models import (
    Coordinate,
    CoordinateFormat,
    DEFAULT_FORMAT,
    WGS84Ellipsoid,
    normalize_latitude,
    normalize_longitude,
)

from geocoord.maidenhead import (
    is_valid_maidenhead,
    latitude_from_maidenhead,
    longitude_from_maidenhead,
    coordinate_from_maidenhead,
)

from geocoord.parsing import (
    convert_to_decimal_degrees,
    validate_lat_lon,
)

from geocoord.distance_calculations import (
    distance_meters,
    distance_miles,
    distance_kilometers,
    bearing,
    centroid,
    distance_meters_batch,
)

from geocoord.synthetic_points import (
    BisectionConfig,
    jitter,
    subdivision_bearing,
    binary_angular_subdivision,
)

from geocoord.projections import (
    TransverseMercator,
    UtmCoordinate,
    utm_zone,
    central_meridian,
)

from geocoord.mgrs import (
    MgrsCoordinate,
    coordinate_to_mgrs,
    lat_lon_to_mgrs,
    mgrs_to_coordinate,
    mgrs_to_lat_lon,
    mgrs_precision,
)

__all__ = [
    # Coordinate models
    "Coordinate",
    "CoordinateFormat",
    "DEFAULT_FORMAT",
    "WGS84Ellipsoid",
    "normalize_latitude",
    "normalize_longitude",
    # Text inputs
    "is_valid_maidenhead",
    "latitude_from_maidenhead",
    "longitude_from_maidenhead",
    "coordinate_from_maidenhead",
    "convert_to_decimal_degrees",
    "validate_lat_lon",
    # Distance calculations
    "distance_meters",
    "distance_miles",
    "distance_kilometers",
    "bearing",
    "centroid",
    "distance_meters_batch",
    # Synthetic points
    "BisectionConfig",
    "jitter",
    "subdivision_bearing",
    "binary_angular_subdivision",
    # Projections
    "TransverseMercator",
    "UtmCoordinate",
    "utm_zone",
    "central_meridian",
    # MGRS
    "MgrsCoordinate",
    "coordinate_to_mgrs",
    "lat_lon_to_mgrs",
    "mgrs_to_coordinate",
    "mgrs_to_lat_lon",
    "mgrs_precision",
]
