"""
Numeric resolution of a parameter set for preview and hints.

Turns a typed parameter record into the canonical numbers the geometry
and tolerance calculators consume: wavelength, aperture, distance, grid
shape, resolved target angle/size and user tolerance.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.geometry import (
    equivalent_full_angle,
    lenslet_diameter,
    max_diffraction_half_angle,
    reference_depth_of_focus,
)
from ..core.tolerance import PIXEL_CEILING, ToleranceLimits, calculate_min_tolerance
from ..params.base import TARGET_KEYS, DOEParams, TargetType
from ..params.loader import normalize
from ..params.modes import (
    CustomParams,
    LensArrayParams,
    LensParams,
    PrismParams,
    SplitterParams,
    SpotProjectorParams,
)
from ..params.resolve import FieldResolver


@dataclass
class ResolvedParams:
    """Canonical numeric view of a parameter set.

    Attributes:
        wavelength_nm: Wavelength in nm
        diameter_mm: Device aperture in mm
        working_distance_mm: Distance in mm (``math.inf`` for far field)
        grid_shape: (rows, cols) of target elements
        full_angle_deg: Resolved full diffraction angle
        half_angle_deg: Resolved half-angle
        equivalent_full_angle_deg: Full angle derived from size + distance
        target_size_mm: Target size when the target is given by size
        is_angle_target: Whether the tolerance domain is angular
        tolerance_percent: User tolerance, None for lens modes
        focal_length_mm: Focal length (lens modes)
        effective_diameter_mm: Aperture used by lens formulas (per lenslet
            for lens arrays)
        max_half_angle_deg: Lens diffraction half-angle, None when the
            lens geometry is degenerate
        invalid_fields: JSON names of fields replaced by their defaults
    """
    wavelength_nm: float
    diameter_mm: float
    working_distance_mm: float
    grid_shape: Tuple[int, int]
    full_angle_deg: float
    half_angle_deg: float
    equivalent_full_angle_deg: Optional[float] = None
    target_size_mm: Optional[float] = None
    is_angle_target: bool = True
    tolerance_percent: Optional[float] = None
    focal_length_mm: Optional[float] = None
    effective_diameter_mm: Optional[float] = None
    max_half_angle_deg: Optional[float] = None
    invalid_fields: Tuple[str, ...] = ()

    @property
    def total_spots(self) -> int:
        return self.grid_shape[0] * self.grid_shape[1]

    @property
    def has_tolerance(self) -> bool:
        return self.tolerance_percent is not None

    def tolerance_limits(self, pixel_ceiling: int = PIXEL_CEILING) -> ToleranceLimits:
        """Run the tolerance engine on the resolved target."""
        return calculate_min_tolerance(
            self.wavelength_nm,
            self.diameter_mm,
            self.half_angle_deg,
            self.target_size_mm,
            self.is_angle_target,
            pixel_ceiling,
        )

    def reference_dof_mm(self) -> Optional[float]:
        if self.focal_length_mm is None or self.effective_diameter_mm is None:
            return None
        return reference_depth_of_focus(
            self.wavelength_nm, self.effective_diameter_mm, self.focal_length_mm
        )


def _grid_shape(params: DOEParams, resolver: FieldResolver) -> Tuple[int, int]:
    if isinstance(params, SpotProjectorParams):
        return (resolver.count('arrayRows', params.array_rows),
                resolver.count('arrayCols', params.array_cols))
    if isinstance(params, SplitterParams):
        return 1, resolver.count('splitterCount', params.splitter_count)
    if isinstance(params, LensArrayParams):
        n = resolver.count('lensArraySize', params.array_size)
        return n, n
    if isinstance(params, CustomParams) and params.pattern_shape is not None:
        rows, cols = params.pattern_shape
        return max(rows, 1), max(cols, 1)
    return 1, 1


def resolve_params(params: DOEParams) -> ResolvedParams:
    """Resolve a parameter record to canonical numbers.

    The record is normalized first, so a size target at infinite distance
    is treated as an angle target. Unparseable fields are replaced by their
    defaults and listed in ``invalid_fields``.
    """
    params = normalize(params)
    resolver = FieldResolver()

    wavelength_nm = resolver.wavelength_nm('wavelength', params.wavelength)
    diameter_mm = resolver.length_mm('deviceDiameter', params.device_diameter)
    distance_mm = resolver.working_distance_mm('workingDistance', params.working_distance)
    grid_shape = _grid_shape(params, resolver)

    resolved = dict(
        wavelength_nm=wavelength_nm,
        diameter_mm=diameter_mm,
        working_distance_mm=distance_mm,
        grid_shape=grid_shape,
    )

    target = params.target_spec
    if target is not None:
        keys = TARGET_KEYS[params.mode]
        equivalent = None
        size_mm = None
        if target.target_type == TargetType.SIZE and math.isfinite(distance_mm):
            size_mm = resolver.length_mm(keys.target_size, target.target_size)
            equivalent = equivalent_full_angle(size_mm, distance_mm)
        if equivalent is not None:
            full_angle = equivalent
        else:
            full_angle = resolver.angle_deg(keys.target_angle, target.target_angle)
        resolved.update(
            full_angle_deg=full_angle,
            half_angle_deg=full_angle / 2,
            equivalent_full_angle_deg=equivalent,
            target_size_mm=size_mm,
            is_angle_target=size_mm is None,
            tolerance_percent=resolver.percent(keys.tolerance, target.tolerance),
        )

    elif isinstance(params, PrismParams):
        deflection = resolver.angle_deg('prismDeflectionAngle', params.deflection_angle)
        resolved.update(
            full_angle_deg=deflection * 2,
            half_angle_deg=deflection,
            tolerance_percent=resolver.percent('prismTolerance', params.tolerance),
        )

    elif isinstance(params, LensParams):
        if isinstance(params, LensArrayParams):
            focal_field = 'lensArrayFocalLength'
            aperture = lenslet_diameter(diameter_mm, grid_shape[0])
        else:
            focal_field = 'lensFocalLength'
            aperture = diameter_mm
        focal_mm = resolver.length_mm(focal_field, params.focal_length)
        max_half = max_diffraction_half_angle(aperture, focal_mm)
        half = max_half or 0.0
        resolved.update(
            full_angle_deg=half * 2,
            half_angle_deg=half,
            max_half_angle_deg=max_half,
            focal_length_mm=focal_mm,
            effective_diameter_mm=aperture,
        )

    else:
        resolved.update(full_angle_deg=0.0, half_angle_deg=0.0)

    invalid: List[str] = resolver.invalid_fields
    return ResolvedParams(invalid_fields=tuple(invalid), **resolved)
