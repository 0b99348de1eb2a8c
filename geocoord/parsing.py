"""
Ad Hoc Degree-Minute String Parsing.

Operators type positions into free-text message fields in whatever form
they like. This module turns the common forms into decimal degrees:

- ``47-32.23N`` / ``122-14.33W``: degrees, a dash, decimal minutes, and a
  hemisphere letter
- ``37.69250150N`` / ``-121.78913700W``: decimal degrees with a redundant
  hemisphere letter
- ``47.5372``: already decimal degrees

It also provides the textual validation used when a position arrives as a
pair of decimal strings.
"""

from decimal import Decimal, ROUND_CEILING
import re
from typing import Optional

from common.errors import CoordinateFormatError
from common.logging_config import get_logger

logger = get_logger(__name__)

_HEMISPHERE_LETTERS = frozenset("NSEW")
_NEGATIVE_HEMISPHERES = frozenset("SW")
_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_OUTPUT_QUANTUM = Decimal("0.00001")


def _is_decimal(text: str) -> bool:
    return _DECIMAL_PATTERN.fullmatch(text) is not None


def _format_ceiling(value: float) -> str:
    """Up to five fraction digits, rounded toward positive infinity, no trailing zeros."""
    rounded = Decimal(repr(value)).quantize(_OUTPUT_QUANTUM, rounding=ROUND_CEILING)
    return format(rounded.normalize(), 'f')


def convert_to_decimal_degrees(ddmm: Optional[str]) -> str:
    """Convert an ad hoc degree-minute string to decimal degrees.

    Parameters
    ----------
    ddmm : str or None
        Text such as ``"47-32.23N"`` or ``"-121.78913700W"``.

    Returns
    -------
    str
        Decimal degrees as text. Input already in decimal form is returned
        unchanged (minus a redundant hemisphere letter). Empty input
        returns an empty string.

    Raises
    ------
    CoordinateFormatError
        If the degrees field is not a number.

    Notes
    -----
    A trailing hemisphere letter is dropped up front only when the text
    starts with ``-`` or has no ``-`` at all; otherwise the ``-`` is the
    degree/minute separator and the letter decides the sign.

    Examples
    --------
    >>> convert_to_decimal_degrees("47-32.23N")
    '47.53717'
    >>> convert_to_decimal_degrees("122-14.33W")
    '-122.23884'
    >>> convert_to_decimal_degrees("37.69250150N")
    '37.69250150'
    """
    if ddmm is None or len(ddmm) == 0:
        return ""
    text = ddmm
    ddmm = ddmm.strip()
    if len(ddmm) == 0:
        return ""

    # 37.69250150N or -121.78913700W, but not 47-32.23N or 122-14.33W
    if ddmm[-1] in _HEMISPHERE_LETTERS and (ddmm.startswith("-") or "-" not in ddmm):
        ddmm = ddmm[:-1]

    if _is_decimal(ddmm):
        return ddmm

    if len(ddmm) == 0:
        return ""

    direction = ddmm[-1]
    fields = ddmm[:-1].split("-")
    if len(fields[0]) == 0:
        return ""

    try:
        degrees = float(fields[0])
    except ValueError as e:
        raise CoordinateFormatError(
            f"can't parse degrees from: {text}"
        ) from e

    minutes = 0.0
    if len(fields) > 1:
        try:
            minutes = float(fields[1])
        except ValueError:
            logger.debug(f"no minutes in {ddmm}, using 0")

    decimal_degrees = degrees + minutes / 60
    sign = "-" if direction in _NEGATIVE_HEMISPHERES else ""
    return sign + _format_ceiling(decimal_degrees)


def validate_lat_lon(latlong: Optional[str], is_latitude: bool) -> str:
    """Describe what is wrong with a decimal latitude or longitude string.

    Parameters
    ----------
    latlong : str or None
        The value to check.
    is_latitude : bool
        True to check against [-90, 90], False for [-180, 180].

    Returns
    -------
    str
        Empty string when the value is acceptable, otherwise a one-line
        message terminated by a newline.
    """
    name = "latitude" if is_latitude else "longitude"

    if latlong is None:
        return f"missing {name} value\n"

    try:
        d = float(latlong)
    except ValueError as e:
        return f"can't parse {name} value: {e}\n"

    limit = 90.0 if is_latitude else 180.0
    if not -limit <= d <= limit:
        return f"{name}({d}) must be between {-limit:g} and {limit:g} degrees\n"
    return ""
