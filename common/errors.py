"""
Error Classes for the Coordinate Engine.

Hard preconditions raise one of the classes below and produce no partial
result. All of them derive from ``ValueError`` so callers that already
catch ``ValueError`` keep working.

Validity checks (``Coordinate.is_valid``, ``is_valid_maidenhead``,
``validate_lat_lon``) never raise; they return a boolean or a message.
"""


class CoordinateError(ValueError):
    """Base class for every error raised by the engine."""


class CoordinateFormatError(CoordinateError):
    """Input text does not follow the expected grammar.

    Raised for malformed Maidenhead locators, malformed MGRS strings,
    unknown 100 km grid letters, unparsable degree strings, and numeric
    use of an invalid coordinate.
    """


class CoordinateRangeError(CoordinateError):
    """A numeric argument lies outside its permitted range.

    Raised for UTM zones outside 1..60, MGRS digit counts outside 0..5,
    non-positive point counts or distances, and negative subdivision
    indices.
    """


class UnsupportedRegionError(CoordinateRangeError):
    """The position lies outside the region the projection supports.

    UTM and MGRS are defined here only for latitudes in [-80, 84];
    the polar UPS grids are not implemented.
    """
