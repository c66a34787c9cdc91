"""
Numeric resolution of parameter fields.

Turns quantity strings into canonical numbers. A field that cannot be
parsed is never used as zero: its documented default is substituted and
the field name is recorded so the caller can flag it to the user.
"""

import math
from typing import Callable, List

from ..core.units import (
    QuantityInput,
    convert_to_degrees,
    convert_to_mm,
    convert_to_nm,
    parse_count,
    parse_number,
    parse_quantity,
    working_distance_to_mm,
    is_infinite_distance,
)
from .base import FIELD_DEFAULTS


class FieldResolver:
    """Resolves fields to numbers, collecting the names of invalid ones.

    Example:
        resolver = FieldResolver()
        wavelength_nm = resolver.wavelength_nm('wavelength', params.wavelength)
        if resolver.invalid_fields:
            ...
    """

    def __init__(self):
        self.invalid_fields: List[str] = []

    def _flag(self, field_name: str) -> None:
        if field_name not in self.invalid_fields:
            self.invalid_fields.append(field_name)

    def _quantity(
        self,
        field_name: str,
        value: QuantityInput,
        converter: Callable[[QuantityInput], float]
    ) -> float:
        if parse_quantity(value).is_valid:
            return converter(value)
        self._flag(field_name)
        return converter(FIELD_DEFAULTS[field_name])

    def length_mm(self, field_name: str, value: QuantityInput) -> float:
        """Length field in mm."""
        return self._quantity(field_name, value, convert_to_mm)

    def wavelength_nm(self, field_name: str, value: QuantityInput) -> float:
        """Wavelength field in nm."""
        return self._quantity(field_name, value, convert_to_nm)

    def angle_deg(self, field_name: str, value: QuantityInput) -> float:
        """Angle field in degrees."""
        return self._quantity(field_name, value, convert_to_degrees)

    def working_distance_mm(self, field_name: str, value: QuantityInput) -> float:
        """Working distance in mm; ``math.inf`` for the infinite sentinel."""
        if is_infinite_distance(value):
            return math.inf
        return self._quantity(field_name, value, working_distance_to_mm)

    def count(self, field_name: str, value: QuantityInput) -> int:
        """Positive integer count (rows, columns, splits, array size)."""
        parsed = parse_count(value)
        if parsed is not None and parsed > 0:
            return parsed
        self._flag(field_name)
        return parse_count(FIELD_DEFAULTS[field_name])

    def percent(self, field_name: str, value: QuantityInput) -> float:
        """Positive percentage (tolerance)."""
        parsed = parse_number(value)
        if parsed is not None and parsed > 0:
            return parsed
        self._flag(field_name)
        return parse_number(FIELD_DEFAULTS[field_name])
