"""
Unit Registry for Distance Arguments.

This module provides a single `pint` registry shared by the engine.
Distances handed to the engine may be bare numbers, which are taken to be
meters, or pint quantities of any length unit.

Example Usage
-------------
>>> from common.units import Q_, to_meters
>>> to_meters(Q_(10, 'km'))
10000.0
>>> to_meters(250)
250.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

from common.errors import CoordinateRangeError

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

Distance = Union[float, int, pint.Quantity]


def to_meters(value: Distance) -> float:
    """Convert a distance argument to float meters.

    Parameters
    ----------
    value : float, int or pint.Quantity
        A bare number (meters) or a quantity with length dimension.

    Returns
    -------
    float
        The distance in meters.

    Raises
    ------
    CoordinateRangeError
        If a quantity does not have length dimension.
    """
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(ureg.meter).magnitude)
        except pint.DimensionalityError as e:
            raise CoordinateRangeError(
                f"Distance has incompatible units. Expected a length, got {value.units}"
            ) from e
    return float(value)


def meters_to(value_m: float, unit: str) -> float:
    """Convert a distance in meters to another length unit.

    Parameters
    ----------
    value_m : float
        Distance in meters.
    unit : str
        Target unit string (e.g. 'km', 'nautical_mile').

    Returns
    -------
    float
        Magnitude in the target unit.
    """
    return float(Q_(value_m, ureg.meter).to(unit).magnitude)
