"""
Military Grid Reference System (MGRS) Encoding and Decoding.

An MGRS reference such as ``10TET5728565159`` reads as:

- ``10``: UTM zone
- ``T``: 8° latitude band, ``C`` to ``X`` without ``I`` and ``O``
- ``ET``: column and row letters of the 100 km square
- ``57285 65159``: easting and northing inside the square, 0 to 5 digits
  each (5 digits = 1 m, 0 digits = the whole 100 km square)

Decoding yields the south-west corner of the referenced cell. Where a
zone or band edge cuts the cell and the corner falls outside, the decoded
point moves onto the edge, so every reference the encoder writes decodes
to a point that encodes back to it.

Column letters cycle through three sets of eight by zone. Row letters
repeat every 2,000 km of northing and alternate between two offset sets
by zone, so decoding uses the latitude band to pick the right 2,000 km
block.

Known Limitations
-----------------
1. No UPS: latitudes outside [-80°, 84°] are rejected.
2. The Norway and Svalbard zone exceptions are not applied.

References
----------
- DMA TM 8358.1, Datums, Ellipsoids, Grids, and Grid Reference Systems
- Veness, C. Geodesy functions, https://github.com/chrisveness/geodesy
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import math
import re

from common.constants import GeodeticConstants
from common.errors import CoordinateFormatError, CoordinateRangeError
from common.logging_config import get_logger
from geocoord.coordinate_models import Coordinate
from geocoord.projections import (
    UTM_MAX_LATITUDE,
    UTM_ZONE_WIDTH,
    TransverseMercator,
    UtmCoordinate,
    central_meridian,
)

logger = get_logger(__name__)

LAT_BANDS = "CDEFGHJKLMNPQRSTUVWX"

# 100 km column letters, by (zone - 1) % 3
E100K = ("ABCDEFGH", "JKLMNPQR", "STUVWXYZ")

# 100 km row letters, by (zone - 1) % 2
N100K = ("ABCDEFGHJKLMNPQRSTUV", "FGHJKLMNPQRSTUVABCDE")

SQUARE_SIZE = int(GeodeticConstants.MGRS_SQUARE_SIZE.value)
NORTHING_CYCLE = int(GeodeticConstants.MGRS_NORTHING_CYCLE.value)
MAX_DIGITS = 5

# Decoded points are kept this far inside their zone, band and grid cell
_EDGE_MARGIN_DEG = 2e-7
_GRID_MARGIN_M = 0.05
_CLAMP_STEPS = 20

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"[0-9]+", re.ASCII)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_digits(digits: int) -> None:
    if not 0 <= digits <= MAX_DIGITS:
        raise CoordinateRangeError(f"MGRS digits must be between 0 and 5, got {digits}")


def latitude_band(lat_deg: float) -> str:
    """Return the MGRS latitude band letter.

    Band X spans 72° to 84°; latitudes at or beyond the UTM limits clamp
    to C and X.

    Examples
    --------
    >>> latitude_band(47.6)
    'T'
    >>> latitude_band(80.5)
    'X'
    """
    if lat_deg <= -80:
        return "C"
    if lat_deg >= 84:
        return "X"
    index = int(math.floor((lat_deg + 80) / 8))
    return LAT_BANDS[min(index, len(LAT_BANDS) - 1)]


def _band_limits(band: str) -> Tuple[float, float]:
    """(south, north) latitude limits of a band; X runs to 84°."""
    south = (LAT_BANDS.index(band) - 10) * 8.0
    north = UTM_MAX_LATITUDE if band == LAT_BANDS[-1] else south + 8.0
    return south, north


def _zone_limits(zone: int) -> Tuple[float, float]:
    """(west, east) longitude limits of a UTM zone."""
    west = central_meridian(zone) - UTM_ZONE_WIDTH / 2
    return west, west + UTM_ZONE_WIDTH


def _band_floor_northing(zone: int, band: str) -> float:
    """Lowest northing a cell of the band can decode to.

    The band's southern edge on the central meridian, less one 100 km
    square, floored to the 100 km line. The slack covers the edge dipping
    toward the zone boundaries and grid points rounded below it.
    """
    band_lat, _ = _band_limits(band)
    edge = UtmCoordinate.from_lat_lon(band_lat, central_meridian(zone))
    return math.floor(edge.northing / SQUARE_SIZE - 1) * SQUARE_SIZE


def _encoded_range(corner: float, digits: int) -> Tuple[float, float]:
    """UTM values, around a decoded corner, that encode back to it."""
    if digits == 0:
        low, high = corner - 0.5, corner + SQUARE_SIZE - 0.5
    else:
        half = 10 ** (MAX_DIGITS - digits) / 2
        low, high = corner - half, corner + half
    return low + _GRID_MARGIN_M, high - _GRID_MARGIN_M


def _grid_units(value: float, digits: int) -> Tuple[int, int]:
    """Split a UTM coordinate into (100 km index, residual in grid units).

    The value is rounded half-up at the grid resolution before it is
    split, so a residual that rounds up carries into the next square.
    With 0 digits the value is rounded to the meter and then truncated
    to its square.
    """
    if digits == 0:
        return _round_half_up(value) // SQUARE_SIZE, 0
    scale = 10 ** (MAX_DIGITS - digits)
    units = _round_half_up(value / scale)
    per_square = SQUARE_SIZE // scale
    return units // per_square, units % per_square


@dataclass(frozen=True)
class MgrsCoordinate:
    """A parsed MGRS reference.

    Attributes
    ----------
    zone : int
        UTM zone, 1 to 60.
    band : str
        Latitude band letter.
    e100k : str
        100 km column letter.
    n100k : str
        100 km row letter.
    easting : str
        Easting digits within the square, possibly empty.
    northing : str
        Northing digits within the square, same length as `easting`.
    """
    zone: int
    band: str
    e100k: str
    n100k: str
    easting: str
    northing: str

    def __str__(self) -> str:
        return f"{self.zone}{self.band}{self.e100k}{self.n100k}{self.easting}{self.northing}"

    @property
    def digits(self) -> int:
        """Digits per axis, 0 to 5."""
        return len(self.easting)

    @classmethod
    def parse(cls, text: Optional[str]) -> 'MgrsCoordinate':
        """Parse an MGRS reference.

        Whitespace anywhere is ignored and letters may be lowercase.

        Raises
        ------
        CoordinateFormatError
            If the text does not follow the MGRS grammar.
        CoordinateRangeError
            If the zone is outside 1..60.

        Examples
        --------
        >>> m = MgrsCoordinate.parse("10T ET 57285 65159")
        >>> m.zone, m.band, m.e100k, m.n100k, m.easting, m.northing
        (10, 'T', 'E', 'T', '57285', '65159')
        """
        if text is None:
            raise CoordinateFormatError("MGRS is null")

        mgrs = _WHITESPACE.sub("", text.upper())
        if len(mgrs) < 4:
            raise CoordinateFormatError(f"MGRS too short: {text}")

        i = 0
        while i < len(mgrs) and mgrs[i] in "0123456789":
            i += 1
        if i == 0 or i > 2:
            raise CoordinateFormatError(f"Invalid MGRS zone: {text}")

        zone = int(mgrs[:i])
        if not 1 <= zone <= 60:
            raise CoordinateRangeError(f"MGRS zone out of range: {zone}")

        if i + 3 > len(mgrs):
            raise CoordinateFormatError(f"Incomplete MGRS (missing band/grid): {text}")

        band = mgrs[i]
        if band not in LAT_BANDS:
            raise CoordinateFormatError(f"Invalid latitude band: {band}")
        e100k = mgrs[i + 1]
        n100k = mgrs[i + 2]

        remainder = mgrs[i + 3:]
        if remainder:
            if _DIGITS.fullmatch(remainder) is None:
                raise CoordinateFormatError(f"Numeric part must be digits: {text}")
            if len(remainder) % 2 != 0:
                raise CoordinateFormatError(f"Numeric part must be even length: {text}")
            if len(remainder) > 2 * MAX_DIGITS:
                raise CoordinateFormatError(f"Max 5 digits per coordinate: {text}")

        half = len(remainder) // 2
        return cls(
            zone=zone,
            band=band,
            e100k=e100k,
            n100k=n100k,
            easting=remainder[:half],
            northing=remainder[half:]
        )

    def to_utm(self) -> UtmCoordinate:
        """Return the UTM position of the cell's south-west corner.

        Raises
        ------
        CoordinateFormatError
            If a 100 km letter is not valid for the zone.
        """
        columns = E100K[(self.zone - 1) % 3]
        col = columns.find(self.e100k)
        if col == -1:
            raise CoordinateFormatError(f"Invalid e100k letter: {self.e100k}")

        rows = N100K[(self.zone - 1) % 2]
        row = rows.find(self.n100k)
        if row == -1:
            raise CoordinateFormatError(f"Invalid n100k letter: {self.n100k}")

        easting = float((col + 1) * SQUARE_SIZE)
        northing = float(row * SQUARE_SIZE)

        if self.digits > 0:
            scale = 10 ** (MAX_DIGITS - self.digits)
            easting += int(self.easting) * scale
            northing += int(self.northing) * scale

        # Southern band edges already carry the false northing
        min_northing = _band_floor_northing(self.zone, self.band)
        while northing < min_northing:
            northing += NORTHING_CYCLE

        hemisphere = "N" if self.band >= "N" else "S"
        return UtmCoordinate(
            zone=self.zone,
            hemisphere=hemisphere,
            easting=easting,
            northing=northing
        )

    def to_lat_lon(self) -> Tuple[float, float]:
        """Return (latitude, longitude) of the cell's south-west corner.

        A corner that lies outside the reference's own zone or latitude
        band is moved to the nearest point inside them that still encodes
        to this reference at the same precision. Cells cut by a zone or
        band edge therefore decode to a point on that edge.
        """
        utm = self.to_utm()
        lat, lon = utm.to_lat_lon()

        south, north = _band_limits(self.band)
        west, east = _zone_limits(self.zone)
        if (south + _EDGE_MARGIN_DEG <= lat <= north - _EDGE_MARGIN_DEG
                and west + _EDGE_MARGIN_DEG <= lon <= east - _EDGE_MARGIN_DEG):
            return lat, lon

        projection = TransverseMercator.for_utm_zone(self.zone, utm.hemisphere)
        e_low, e_high = _encoded_range(utm.easting, self.digits)
        n_low, n_high = _encoded_range(utm.northing, self.digits)

        for _ in range(_CLAMP_STEPS):
            lat = min(max(lat, south + _EDGE_MARGIN_DEG), north - _EDGE_MARGIN_DEG)
            lon = min(max(lon, west + _EDGE_MARGIN_DEG), east - _EDGE_MARGIN_DEG)
            easting, northing = projection.to_projected(lat, lon)
            if e_low <= easting <= e_high and n_low <= northing <= n_high:
                return lat, lon
            lat, lon = projection.to_geodetic(
                min(max(easting, e_low), e_high),
                min(max(northing, n_low), n_high)
            )

        logger.warning(f"no point of {self} lies inside zone {self.zone} band {self.band}")
        return lat, lon

    @classmethod
    def from_utm(
        cls,
        utm: UtmCoordinate,
        digits: int,
        latitude: Optional[float] = None
    ) -> 'MgrsCoordinate':
        """Encode a UTM position.

        Parameters
        ----------
        utm : UtmCoordinate
            Position to encode.
        digits : int
            Digits per axis, 0 (100 km) to 5 (1 m).
        latitude : float, optional
            Latitude of the position in degrees, used for the band letter.
            Inverse-projected from `utm` when omitted.

        Raises
        ------
        CoordinateRangeError
            If `digits` is outside 0..5.
        """
        _check_digits(digits)

        if latitude is None:
            latitude, _ = utm.to_lat_lon()
        band = latitude_band(latitude)

        col, e_rel = _grid_units(utm.easting, digits)
        col = min(max(col - 1, 0), 7)
        e100k = E100K[(utm.zone - 1) % 3][col]

        row, n_rel = _grid_units(utm.northing, digits)
        n100k = N100K[(utm.zone - 1) % 2][row % 20]

        if digits > 0:
            easting = f"{e_rel:0{digits}d}"
            northing = f"{n_rel:0{digits}d}"
        else:
            easting = northing = ""

        return cls(
            zone=utm.zone,
            band=band,
            e100k=e100k,
            n100k=n100k,
            easting=easting,
            northing=northing
        )


def lat_lon_to_mgrs(lat_deg: float, lon_deg: float, digits: int = MAX_DIGITS) -> str:
    """Encode a latitude/longitude as MGRS.

    Parameters
    ----------
    lat_deg, lon_deg : float
        Position in degrees. Latitude must be within [-80, 84].
    digits : int
        Digits per axis, 0 (100 km) to 5 (1 m).

    Returns
    -------
    str
        MGRS reference of length 4 + 2·digits for zones 1-9 and
        5 + 2·digits for zones 10-60.

    Raises
    ------
    CoordinateRangeError
        If `digits` is outside 0..5.
    UnsupportedRegionError
        If the latitude is outside [-80, 84].

    Examples
    --------
    >>> lat_lon_to_mgrs(47.6062, -122.3321, 2)[:5]
    '10TET'
    """
    _check_digits(digits)
    utm = UtmCoordinate.from_lat_lon(lat_deg, lon_deg)
    return str(MgrsCoordinate.from_utm(utm, digits, latitude=lat_deg))


def coordinate_to_mgrs(coordinate: Coordinate, digits: int = MAX_DIGITS) -> str:
    """Encode a `Coordinate` as MGRS.

    Raises
    ------
    CoordinateFormatError
        If the coordinate is not valid.
    """
    lat, lon = coordinate.to_lat_lon()
    return lat_lon_to_mgrs(lat, lon, digits)


def mgrs_to_lat_lon(text: str) -> Tuple[float, float]:
    """Decode MGRS to the (latitude, longitude) of the cell's south-west corner.

    See `MgrsCoordinate.to_lat_lon` for cells cut by a zone or band edge.
    """
    return MgrsCoordinate.parse(text).to_lat_lon()


def mgrs_to_coordinate(text: str, precision: int = 7) -> Coordinate:
    """Decode MGRS to a `Coordinate`.

    Seven digits keep the decoded point to about a centimeter, which is
    enough for the result to encode back to the same reference.
    """
    mgrs = MgrsCoordinate.parse(text)
    logger.debug(f"decoding {mgrs} at {mgrs.digits} digits per axis")
    lat, lon = mgrs.to_lat_lon()
    return Coordinate.from_degrees(lat, lon, precision=precision)


def mgrs_precision(text: str) -> int:
    """Digits per axis of an MGRS reference, 0 for a bare 100 km square.

    Examples
    --------
    >>> mgrs_precision("10TET5728565159")
    5
    >>> mgrs_precision("33UXP04")
    1
    """
    return MgrsCoordinate.parse(text).digits
