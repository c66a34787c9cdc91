"""
Optical geometry calculators.

All inputs are in canonical units (mm, nm, degrees). Degenerate geometry
(non-finite distance, non-positive size/diameter/focal length) returns
None, meaning "not applicable", instead of raising.
"""

import math
from typing import Optional


def equivalent_full_angle(target_size_mm: float, working_distance_mm: float) -> Optional[float]:
    """Full angle subtended by a target of given size at a given distance.

    Args:
        target_size_mm: Physical target size in mm
        working_distance_mm: DOE-to-target distance in mm

    Returns:
        ``2 * atan((size / 2) / distance)`` in degrees, or None when the
        distance is infinite/non-positive or the size is non-positive
    """
    if not math.isfinite(working_distance_mm) or working_distance_mm <= 0:
        return None
    if target_size_mm <= 0:
        return None
    half_angle_rad = math.atan((target_size_mm / 2) / working_distance_mm)
    return math.degrees(2 * half_angle_rad)


def target_size_at_distance(full_angle_deg: float, working_distance_mm: float) -> Optional[float]:
    """Inverse of ``equivalent_full_angle``: target size in mm."""
    if not math.isfinite(working_distance_mm) or working_distance_mm <= 0:
        return None
    if full_angle_deg <= 0 or full_angle_deg >= 180:
        return None
    return 2 * working_distance_mm * math.tan(math.radians(full_angle_deg) / 2)


def numerical_aperture(diameter_mm: float, focal_length_mm: float) -> Optional[float]:
    """Paraxial NA = (D/2) / f."""
    if diameter_mm <= 0 or focal_length_mm <= 0:
        return None
    return (diameter_mm / 2) / focal_length_mm


def reference_depth_of_focus(
    wavelength_nm: float,
    diameter_mm: float,
    focal_length_mm: float
) -> Optional[float]:
    """Reference depth of focus of a diffractive lens, ``lambda / NA^2`` in mm."""
    na = numerical_aperture(diameter_mm, focal_length_mm)
    if na is None or wavelength_nm <= 0:
        return None
    wavelength_mm = wavelength_nm / 1e6
    return wavelength_mm / (na * na)


def max_diffraction_half_angle(diameter_mm: float, focal_length_mm: float) -> Optional[float]:
    """Marginal ray half-angle of a lens, ``atan((D/2) / f)`` in degrees."""
    na = numerical_aperture(diameter_mm, focal_length_mm)
    if na is None:
        return None
    return math.degrees(math.atan(na))


def lenslet_diameter(diameter_mm: float, array_size: int) -> float:
    """Effective aperture of one lenslet in an N x N array."""
    return diameter_mm / max(array_size, 1)


def lens_array_depth_of_focus(
    wavelength_nm: float,
    diameter_mm: float,
    focal_length_mm: float,
    array_size: int
) -> Optional[float]:
    """Per-lenslet reference depth of focus in mm."""
    return reference_depth_of_focus(
        wavelength_nm, lenslet_diameter(diameter_mm, array_size), focal_length_mm
    )


def lens_array_half_angle(
    diameter_mm: float,
    focal_length_mm: float,
    array_size: int
) -> Optional[float]:
    """Per-lenslet max diffraction half-angle in degrees."""
    return max_diffraction_half_angle(lenslet_diameter(diameter_mm, array_size), focal_length_mm)
