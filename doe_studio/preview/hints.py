"""
Parameter-panel hints.

Live figures shown next to the form fields while the user edits: the
estimated minimum tolerance, the element budget, the equivalent angle of
a size target and the lens figures of merit.

The spot-projector hint shows the engine's linear element count as an
N x N array, while the preview summary reports the square root of the
same count. Both behaviours are kept as they are.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..core.tolerance import PIXEL_CEILING
from ..params.base import DOEMode, DOEParams
from .resolved import resolve_params


@dataclass
class ParameterHints:
    """Hints for the active mode; None fields are not shown."""
    mode: str
    min_tolerance_percent: Optional[float] = None
    max_effective_pixels: Optional[int] = None
    max_array_size: Optional[str] = None
    equivalent_full_angle: Optional[float] = None
    reference_dof_mm: Optional[float] = None
    max_diffraction_half_angle: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'mode': self.mode}
        optional = {
            'minTolerancePercent': self.min_tolerance_percent,
            'maxEffectivePixels': self.max_effective_pixels,
            'maxArraySize': self.max_array_size,
            'equivalentFullAngle': self.equivalent_full_angle,
            'referenceDOF': self.reference_dof_mm,
            'maxDiffractionHalfAngle': self.max_diffraction_half_angle,
        }
        for key, value in optional.items():
            if value is not None:
                result[key] = value
        return result


def parameter_hints(params: DOEParams, pixel_ceiling: int = PIXEL_CEILING) -> ParameterHints:
    """Compute the parameter-panel hints for ``params.mode``."""
    resolved = resolve_params(params)
    hints = ParameterHints(mode=params.mode.value)

    if resolved.has_tolerance:
        limits = resolved.tolerance_limits(pixel_ceiling)
        hints.min_tolerance_percent = limits.min_tolerance_percent
        if params.mode != DOEMode.PRISM:
            hints.max_effective_pixels = limits.max_effective_pixels
        if params.mode == DOEMode.SPOT_PROJECTOR_2D:
            n = limits.max_effective_pixels
            hints.max_array_size = f"{n}×{n}"

    hints.equivalent_full_angle = resolved.equivalent_full_angle_deg

    if params.mode in (DOEMode.LENS, DOEMode.LENS_ARRAY):
        hints.reference_dof_mm = resolved.reference_dof_mm()
        hints.max_diffraction_half_angle = resolved.max_half_angle_deg

    return hints
