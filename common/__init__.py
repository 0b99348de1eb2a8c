"""
Common utilities and infrastructure for the Geospatial Coordinate Engine.

This package provides foundational components used across all modules:
- Geodetic constants with uncertainty bounds
- Classified error hierarchy
- Unit registry for distance arguments
- Logging infrastructure
"""

from common.constants import GeodeticConstants
from common.errors import (
    CoordinateError,
    CoordinateFormatError,
    CoordinateRangeError,
    UnsupportedRegionError,
)
from common.units import ureg, Q_, to_meters
from common.logging_config import get_logger

__all__ = [
    "GeodeticConstants",
    "CoordinateError",
    "CoordinateFormatError",
    "CoordinateRangeError",
    "UnsupportedRegionError",
    "ureg",
    "Q_",
    "to_meters",
    "get_logger",
]
