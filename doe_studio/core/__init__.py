"""Core calculators: unit conversion, optical geometry, tolerance limits."""

from .units import (
    Quantity,
    parse_quantity,
    convert_to_mm,
    convert_to_nm,
    convert_to_degrees,
    is_infinite_distance,
    working_distance_to_mm,
)
from .geometry import (
    equivalent_full_angle,
    reference_depth_of_focus,
    max_diffraction_half_angle,
    lens_array_depth_of_focus,
    lens_array_half_angle,
)
from .tolerance import (
    PIXEL_CEILING,
    ToleranceLimits,
    calculate_min_tolerance,
    max_array_size,
)

__all__ = [
    "Quantity",
    "parse_quantity",
    "convert_to_mm",
    "convert_to_nm",
    "convert_to_degrees",
    "is_infinite_distance",
    "working_distance_to_mm",
    "equivalent_full_angle",
    "reference_depth_of_focus",
    "max_diffraction_half_angle",
    "lens_array_depth_of_focus",
    "lens_array_half_angle",
    "PIXEL_CEILING",
    "ToleranceLimits",
    "calculate_min_tolerance",
    "max_array_size",
]
