"""
Unit parsing and conversion for user-entered physical quantities.

Form fields arrive as strings such as "532nm", "12.7mm", "30deg" or
"0.5 rad". This module parses them into a (value, unit) pair and converts
to the canonical units used throughout the package:

- length:     millimeters
- wavelength: nanometers
- angle:      degrees

Unknown units pass the numeric value through unchanged. A string that does
not look like a quantity at all parses to ``Quantity(0.0, '')``, which
callers must treat as invalid input (see ``Quantity.is_valid``).
"""

import math
import re
from typing import NamedTuple, Optional, Union


QuantityInput = Union[str, int, float]

# Optional number, optional pi factor, optional unit suffix
_QUANTITY_RE = re.compile(
    r'^\s*(\d+(?:\.\d*)?|\.\d+)?\s*(π|pi)?\s*([a-zA-Z°µμ]+)?\s*$',
    re.IGNORECASE
)

INFINITE_DISTANCE_TOKENS = ('inf', 'infinity')

# Conversion factors to the canonical unit of each dimension
LENGTH_TO_MM = {
    'm': 1000.0,
    'cm': 10.0,
    'mm': 1.0,
    'um': 1e-3,
    'µm': 1e-3,
    'μm': 1e-3,
    'in': 25.4,
    'ft': 304.8,
}

WAVELENGTH_TO_NM = {
    'nm': 1.0,
    'um': 1e3,
    'µm': 1e3,
    'μm': 1e3,
    'mm': 1e6,
}

ANGLE_TO_DEG = {
    'rad': 180.0 / math.pi,
}


class Quantity(NamedTuple):
    """A parsed numeric value with its (lower-cased) unit token."""
    value: float
    unit: str

    @property
    def is_valid(self) -> bool:
        """False for the unparseable sentinel (value 0 with no unit)."""
        return not (self.value == 0 and self.unit == '')


INVALID_QUANTITY = Quantity(0.0, '')


def parse_quantity(value: QuantityInput) -> Quantity:
    """Parse ``<number><optional unit>`` into a Quantity.

    A bare ``π``/``pi`` (optionally preceded by a multiplier) is accepted as
    the number, so "π rad" and "0.5pi rad" are valid angles.

    Args:
        value: String or number from a form field

    Returns:
        Quantity; ``INVALID_QUANTITY`` if the input cannot be parsed
    """
    if isinstance(value, bool) or value is None:
        return INVALID_QUANTITY
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            return INVALID_QUANTITY
        return Quantity(float(value), '')

    match = _QUANTITY_RE.match(str(value))
    if not match:
        return INVALID_QUANTITY

    number, pi_factor, unit = match.groups()
    if number is None and pi_factor is None:
        return INVALID_QUANTITY

    magnitude = float(number) if number is not None else 1.0
    if pi_factor is not None:
        magnitude *= math.pi

    return Quantity(magnitude, (unit or '').lower())


def _convert(value: QuantityInput, factors: dict) -> float:
    parsed = parse_quantity(value)
    return parsed.value * factors.get(parsed.unit, 1.0)


def convert_to_mm(value: QuantityInput) -> float:
    """Convert a length to millimeters (unknown unit: treated as mm)."""
    return _convert(value, LENGTH_TO_MM)


def convert_to_nm(value: QuantityInput) -> float:
    """Convert a wavelength to nanometers (unknown unit: treated as nm)."""
    return _convert(value, WAVELENGTH_TO_NM)


def convert_to_degrees(value: QuantityInput) -> float:
    """Convert an angle to degrees. Only ``rad`` is scaled."""
    return _convert(value, ANGLE_TO_DEG)


def is_infinite_distance(value: QuantityInput) -> bool:
    """Check for the infinite working distance sentinel ("inf"/"infinity")."""
    if isinstance(value, float) and math.isinf(value) and value > 0:
        return True
    return str(value or '').strip().lower() in INFINITE_DISTANCE_TOKENS


def working_distance_to_mm(value: QuantityInput) -> float:
    """Convert a working distance to millimeters.

    The infinite sentinel maps to ``math.inf`` and never goes through the
    length converter.
    """
    if is_infinite_distance(value):
        return math.inf
    return convert_to_mm(value)


_LEADING_NUMBER_RE = re.compile(r'^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))')


def parse_number(value: QuantityInput) -> Optional[float]:
    """Parse the leading number of a field ("0.5", "2%" -> 2.0).

    Returns:
        The number, or None when the field does not start with one
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    match = _LEADING_NUMBER_RE.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_count(value: QuantityInput) -> Optional[int]:
    """Parse the leading integer of a count field ("50", "7.9" -> 7)."""
    number = parse_number(value)
    if number is None:
        return None
    return int(number)
