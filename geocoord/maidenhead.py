"""
Maidenhead Grid Locator Decoding.

Amateur radio operators report position as a 6-character Maidenhead
locator such as ``CN87vm``: a field (two letters A-R, 20° x 10°), a square
(two digits, 2° x 1°) and a subsquare (two letters A-X, 5' x 2.5').
Decoding yields the center of the subsquare.

Only the 6-character form is accepted. Extended 8/10 character locators
and encoding a point into a locator are out of scope.

References
----------
- https://en.wikipedia.org/wiki/Maidenhead_Locator_System
"""

import re
from typing import Optional

from common.errors import CoordinateFormatError
from geocoord.coordinate_models import Coordinate


_LOCATOR_PATTERN = re.compile(r"[A-R]{2}[0-9]{2}[A-X]{2}", re.IGNORECASE | re.ASCII)

# Subsquare size in degrees
_SUBSQUARE_LON = 5.0 / 60
_SUBSQUARE_LAT = 2.5 / 60


def is_valid_maidenhead(grid: Optional[str]) -> bool:
    """Check whether a string is a 6-character Maidenhead locator.

    Examples
    --------
    >>> is_valid_maidenhead("CN87vm")
    True
    >>> is_valid_maidenhead("CN8")
    False
    """
    if grid is None:
        return False
    return _LOCATOR_PATTERN.fullmatch(grid) is not None


def _require_locator(grid: Optional[str]) -> str:
    if not is_valid_maidenhead(grid):
        raise CoordinateFormatError(f"grid: {grid} is not a valid Maidenhead grid string")
    return grid.upper()


def latitude_from_maidenhead(grid: str) -> float:
    """Latitude of the center of a locator's subsquare, in degrees.

    Raises
    ------
    CoordinateFormatError
        If `grid` is not a valid 6-character locator.
    """
    grid = _require_locator(grid)
    return (
        -90
        + 10 * (ord(grid[1]) - ord('A'))
        + (ord(grid[3]) - ord('0'))
        + _SUBSQUARE_LAT * (ord(grid[5]) - ord('A'))
        + _SUBSQUARE_LAT / 2
    )


def longitude_from_maidenhead(grid: str) -> float:
    """Longitude of the center of a locator's subsquare, in degrees.

    Raises
    ------
    CoordinateFormatError
        If `grid` is not a valid 6-character locator.
    """
    grid = _require_locator(grid)
    return (
        -180
        + 20 * (ord(grid[0]) - ord('A'))
        + 2 * (ord(grid[2]) - ord('0'))
        + _SUBSQUARE_LON * (ord(grid[4]) - ord('A'))
        + _SUBSQUARE_LON / 2
    )


def coordinate_from_maidenhead(grid: str) -> Coordinate:
    """Coordinate at the center of a locator, at full double precision."""
    return Coordinate(
        latitude=repr(latitude_from_maidenhead(grid)),
        longitude=repr(longitude_from_maidenhead(grid))
    )
