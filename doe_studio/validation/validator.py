"""
Parameter validation.

Checks a raw parameter mapping and reports errors (unparseable or
out-of-range fields), warnings (the preview warning rules plus a
tolerance below the diffraction limit) and infos (automatic corrections).
Validation never blocks preview generation; errors only gate optimization.
"""

from typing import Any, Mapping

from ..api.errors import ErrorCode, WarningCode
from ..core.tolerance import PIXEL_CEILING
from ..core.units import is_infinite_distance
from ..params.base import FIELD_DEFAULTS, TARGET_KEYS, DOEMode, TargetType
from ..params.loader import load_params, parse_mode
from ..preview.resolved import resolve_params
from ..preview.rules import RuleInput, triggered_rules
from .messages import ValidationResult


def validate_params(data: Mapping[str, Any], pixel_ceiling: int = PIXEL_CEILING) -> ValidationResult:
    """Validate a raw camelCase parameter mapping.

    Args:
        data: Parameter mapping as stored on a design or sent by the form
        pixel_ceiling: Cap used for the tolerance limit check

    Returns:
        ValidationResult with errors, warnings and infos
    """
    result = ValidationResult()

    try:
        mode = parse_mode(data.get('mode'))
    except ValueError as e:
        result.add_error(ErrorCode.UNKNOWN_MODE.value, str(e), field='mode')
        return result

    params = load_params(data)
    resolved = resolve_params(params)

    for field_name in resolved.invalid_fields:
        result.add_error(
            ErrorCode.INVALID_QUANTITY.value,
            f"Cannot parse value {data.get(field_name)!r}",
            field=field_name,
            suggestion=f"Use a number with an optional unit, e.g. {FIELD_DEFAULTS[field_name]!r}",
        )

    if resolved.wavelength_nm <= 0:
        result.add_error(ErrorCode.OUT_OF_RANGE.value, "Wavelength must be positive", field='wavelength')
    if resolved.diameter_mm <= 0:
        result.add_error(ErrorCode.OUT_OF_RANGE.value, "Device diameter must be positive", field='deviceDiameter')
    if resolved.working_distance_mm <= 0:
        result.add_error(
            ErrorCode.OUT_OF_RANGE.value,
            "Working distance must be positive or 'inf'",
            field='workingDistance',
        )

    if params.target_spec is not None:
        keys = TARGET_KEYS[mode]
        if resolved.is_angle_target and not (0 < resolved.full_angle_deg < 180):
            result.add_error(
                ErrorCode.OUT_OF_RANGE.value,
                "Target angle must be between 0 and 180 degrees",
                field=keys.target_angle,
            )
        if not resolved.is_angle_target and resolved.target_size_mm <= 0:
            result.add_error(ErrorCode.OUT_OF_RANGE.value, "Target size must be positive", field=keys.target_size)
    elif mode == DOEMode.PRISM and not (0 < resolved.half_angle_deg < 90):
        result.add_error(
            ErrorCode.OUT_OF_RANGE.value,
            "Deflection angle must be between 0 and 90 degrees",
            field='prismDeflectionAngle',
        )
    elif resolved.focal_length_mm is not None and resolved.focal_length_mm <= 0:
        field_name = 'lensArrayFocalLength' if mode == DOEMode.LENS_ARRAY else 'lensFocalLength'
        result.add_error(ErrorCode.OUT_OF_RANGE.value, "Focal length must be positive", field=field_name)

    # Size targets are switched to angle at infinite distance
    if is_infinite_distance(data.get('workingDistance', FIELD_DEFAULTS['workingDistance'])):
        for keys in TARGET_KEYS.values():
            if data.get(keys.target_type) == TargetType.SIZE.value:
                result.add_info(
                    WarningCode.TARGET_TYPE_CORRECTED.value,
                    "Target type set to 'angle': a size target is undefined at infinite distance",
                    field=keys.target_type,
                )

    for rule in triggered_rules(RuleInput(
        full_angle_deg=resolved.full_angle_deg,
        tolerance_percent=resolved.tolerance_percent,
        total_spots=resolved.total_spots,
    )):
        result.add_warning(rule.code.value, rule.message)

    if resolved.has_tolerance and result.is_valid:
        limits = resolved.tolerance_limits(pixel_ceiling)
        if resolved.tolerance_percent < limits.min_tolerance_percent:
            field_name = params.tolerance_field[0]
            result.add_warning(
                WarningCode.TOLERANCE_BELOW_LIMIT.value,
                f"Tolerance {resolved.tolerance_percent:g}% is below the diffraction limit "
                f"({limits.min_tolerance_percent:.3f}%)",
                field=field_name,
                suggestion=f"Use a tolerance of at least {limits.min_tolerance_percent:.3f}%",
            )

    return result
