"""
Tolerance and resolution limits.

The smallest meaningful tolerance is set by the diffraction-limited
resolution of the device aperture; its reciprocal is the number of
independently controllable target elements (pixels, spots, splits) that
fit across the target. That count is capped at ``PIXEL_CEILING`` to keep
optimization tractable.

Angle mode (target given as a full angle, half-angle theta):
    ratio = lambda / D / cos(theta) / theta
Size mode (target given as a physical size S):
    ratio = (D / PIXEL_CEILING) / S
"""

import math
from dataclasses import dataclass
from typing import Optional, Dict, Any


PIXEL_CEILING = 3000

# Returned for degenerate input instead of a computed limit
FALLBACK_MIN_TOLERANCE_PERCENT = 0.1


@dataclass(frozen=True)
class ToleranceLimits:
    """Diffraction-limited tolerance floor and resolution-element budget.

    Attributes:
        min_tolerance_percent: Smallest physically meaningful tolerance (%)
        max_effective_pixels: Max independently controllable elements,
            capped at the pixel ceiling
    """
    min_tolerance_percent: float
    max_effective_pixels: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'minTolerancePercent': self.min_tolerance_percent,
            'maxEffectivePixels': self.max_effective_pixels,
        }


def fallback_limits(pixel_ceiling: int = PIXEL_CEILING) -> ToleranceLimits:
    """Fixed non-failure default for unusable input."""
    return ToleranceLimits(
        min_tolerance_percent=FALLBACK_MIN_TOLERANCE_PERCENT,
        max_effective_pixels=pixel_ceiling,
    )


def angle_mode_limits(
    wavelength_nm: float,
    diameter_mm: float,
    max_half_angle_deg: float,
    pixel_ceiling: int = PIXEL_CEILING
) -> ToleranceLimits:
    """Tolerance limits for a target specified by its angular extent.

    Args:
        wavelength_nm: Wavelength in nm
        diameter_mm: Device diameter in mm
        max_half_angle_deg: Half of the target full angle, in degrees
        pixel_ceiling: Hard cap on the element count

    Returns:
        ToleranceLimits (fallback for non-positive angle or unusable input)
    """
    if not (0 < max_half_angle_deg < 90):
        return fallback_limits(pixel_ceiling)
    if not (0 < wavelength_nm < math.inf) or not (0 < diameter_mm < math.inf):
        return fallback_limits(pixel_ceiling)

    wavelength_mm = wavelength_nm / 1e6
    theta_rad = math.radians(max_half_angle_deg)
    min_tolerance_ratio = wavelength_mm / diameter_mm / math.cos(theta_rad) / theta_rad

    # Reduces to floor(1 / ratio)
    full_angle_rad = math.radians(max_half_angle_deg * 2)
    max_effective_pixels = math.floor(full_angle_rad / (min_tolerance_ratio * full_angle_rad))

    return ToleranceLimits(
        min_tolerance_percent=min_tolerance_ratio * 100,
        max_effective_pixels=min(max_effective_pixels, pixel_ceiling),
    )


def size_mode_limits(
    diameter_mm: float,
    target_size_mm: Optional[float],
    pixel_ceiling: int = PIXEL_CEILING
) -> ToleranceLimits:
    """Tolerance limits for a target specified by its physical size.

    Args:
        diameter_mm: Device diameter in mm
        target_size_mm: Target size in mm
        pixel_ceiling: Hard cap on the element count

    Returns:
        ToleranceLimits (fallback for missing/non-positive size)
    """
    if target_size_mm is None or not (0 < target_size_mm < math.inf):
        return fallback_limits(pixel_ceiling)
    if not (0 < diameter_mm < math.inf):
        return fallback_limits(pixel_ceiling)

    min_resolvable_size_mm = diameter_mm / pixel_ceiling
    max_effective_pixels = math.floor(target_size_mm / min_resolvable_size_mm)

    return ToleranceLimits(
        min_tolerance_percent=(min_resolvable_size_mm / target_size_mm) * 100,
        max_effective_pixels=min(max_effective_pixels, pixel_ceiling),
    )


def calculate_min_tolerance(
    wavelength_nm: float,
    diameter_mm: float,
    max_half_angle_deg: float,
    target_size_mm: Optional[float],
    is_angle_mode: bool,
    pixel_ceiling: int = PIXEL_CEILING
) -> ToleranceLimits:
    """Dispatch to angle- or size-mode limits.

    Example:
        limits = calculate_min_tolerance(532, 12.7, 15, None, is_angle_mode=True)
        print(f"{limits.min_tolerance_percent:.3f}%")
    """
    if is_angle_mode:
        return angle_mode_limits(wavelength_nm, diameter_mm, max_half_angle_deg, pixel_ceiling)
    return size_mode_limits(diameter_mm, target_size_mm, pixel_ceiling)


def max_array_size(max_effective_pixels: int) -> int:
    """Side length of the largest square spot array for a linear element budget."""
    return math.isqrt(max(max_effective_pixels, 0))
