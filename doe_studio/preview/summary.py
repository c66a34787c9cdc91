"""
Preview summary builder.

``build_preview`` is a pure function of the parameter set: the same input
always produces the same PreviewData. It never raises for bad field
values; unparseable fields are defaulted and reported in
``invalid_fields``.

Example:
    from doe_studio.params import load_params
    from doe_studio.preview import build_preview

    preview = build_preview(load_params({'mode': '2d_spot_projector'}))
    print(preview.summary.full_angle, preview.warnings)
"""

from typing import Union, Mapping, Any

from ..core.tolerance import PIXEL_CEILING, max_array_size
from ..params.base import DOEMode, DOEParams
from ..params.loader import load_params
from ..api.response import PreviewData, PreviewSummary
from .resolved import ResolvedParams, resolve_params
from .rules import RuleInput, evaluate_warnings


ESTIMATED_EFFICIENCY = "~75-85%"
LONG_COMPUTATION_SPOTS = 5000
COMPUTATION_TIME_LONG = "~5-10 min"
COMPUTATION_TIME_SHORT = "~1-3 min"


def format_angle(value_deg: float) -> str:
    return f"{value_deg:.2f}°"


def estimate_computation_time(total_spots: int) -> str:
    """Heuristic optimization time from the spot count."""
    if total_spots > LONG_COMPUTATION_SPOTS:
        return COMPUTATION_TIME_LONG
    return COMPUTATION_TIME_SHORT


def _pixel_pitch(resolved: ResolvedParams) -> str:
    pitch_mm = resolved.diameter_mm / max(resolved.grid_shape)
    return f"{pitch_mm:.3f} mm"


def _actual_tolerance(resolved: ResolvedParams) -> str:
    fraction = resolved.tolerance_percent / 100
    if resolved.is_angle_target:
        return f"{fraction * resolved.full_angle_deg:.3f}°"
    return f"{fraction * resolved.target_size_mm:.3f} mm"


def build_summary(mode: DOEMode, resolved: ResolvedParams,
                  pixel_ceiling: int = PIXEL_CEILING) -> PreviewSummary:
    """Assemble the summary fields from resolved values."""
    summary = PreviewSummary(
        total_spots=resolved.total_spots,
        pixel_pitch=_pixel_pitch(resolved),
        diffraction_angle=format_angle(resolved.half_angle_deg),
        full_angle=format_angle(resolved.full_angle_deg),
        estimated_efficiency=ESTIMATED_EFFICIENCY,
        computation_time=estimate_computation_time(resolved.total_spots),
        doe_mode=mode.value,
    )

    if resolved.equivalent_full_angle_deg is not None:
        summary.equivalent_full_angle = format_angle(resolved.equivalent_full_angle_deg)

    if resolved.has_tolerance:
        limits = resolved.tolerance_limits(pixel_ceiling)
        summary.actual_tolerance = _actual_tolerance(resolved)
        summary.min_tolerance = f"{limits.min_tolerance_percent:.3f}%"

        if mode in (DOEMode.CUSTOM, DOEMode.DIFFUSER):
            summary.effective_pixels = limits.max_effective_pixels
        elif mode == DOEMode.SPLITTER_1D:
            summary.max_splits = limits.max_effective_pixels
        elif mode == DOEMode.SPOT_PROJECTOR_2D:
            # Side of the square array that fits the element budget
            summary.max_array_size = max_array_size(limits.max_effective_pixels)

    dof = resolved.reference_dof_mm()
    if dof is not None:
        summary.reference_dof = f"{dof:.4f} mm"

    return summary


def build_preview(
    params: Union[DOEParams, Mapping[str, Any]],
    pixel_ceiling: int = PIXEL_CEILING
) -> PreviewData:
    """Compute the preview summary and warnings for a parameter set.

    Args:
        params: Typed parameter record, or a raw camelCase mapping which is
            passed through ``load_params`` first
        pixel_ceiling: Cap on effective pixel / split counts

    Returns:
        PreviewData with summary, ordered warnings and invalid field names

    Raises:
        ValueError: If a raw mapping names an unknown mode
    """
    if not isinstance(params, DOEParams):
        params = load_params(params)

    resolved = resolve_params(params)
    summary = build_summary(params.mode, resolved, pixel_ceiling)
    warnings = evaluate_warnings(RuleInput(
        full_angle_deg=resolved.full_angle_deg,
        tolerance_percent=resolved.tolerance_percent,
        total_spots=resolved.total_spots,
    ))

    return PreviewData(
        summary=summary,
        warnings=warnings,
        invalid_fields=list(resolved.invalid_fields),
    )
