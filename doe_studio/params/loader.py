"""
Load boundary for parameter sets.

Stored designs, templates and live form state all arrive as flat JSON
mappings in the UI's camelCase shape. ``load_params`` is the single place
where such a mapping becomes a typed parameter record: missing fields get
their documented defaults and the working-distance / target-type coupling
is enforced.
"""

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from ..core.units import is_infinite_distance, parse_count
from .base import (
    DEFAULT_MODE,
    FIELD_DEFAULTS,
    GENERIC_TARGET_KEYS,
    TARGET_KEYS,
    DOEMode,
    DOEParams,
    DeviceShape,
    LensType,
    PatternPreset,
    ResizeMode,
    SpecialFunction,
    TargetSpec,
    TargetType,
)
from .modes import (
    CustomParams,
    DiffuserParams,
    LensArrayParams,
    LensParams,
    PatternInfo,
    PrismParams,
    SplitterParams,
    SpotProjectorParams,
)


E = TypeVar('E')

TARGET_TYPE_KEYS = tuple(keys.target_type for keys in TARGET_KEYS.values())


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == '')


def _get(data: Mapping[str, Any], key: str, *fallback_keys: str) -> Any:
    """Field value, falling back to legacy keys and then the default."""
    for k in (key,) + fallback_keys:
        value = data.get(k)
        if not _is_missing(value):
            return value
    return FIELD_DEFAULTS[key]


def _get_str(data: Mapping[str, Any], key: str, *fallback_keys: str) -> str:
    return str(_get(data, key, *fallback_keys))


def _get_bool(data: Mapping[str, Any], key: str) -> bool:
    value = _get(data, key)
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def _get_enum(data: Mapping[str, Any], enum_cls: Type[E], key: str, *fallback_keys: str) -> E:
    value = _get(data, key, *fallback_keys)
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return enum_cls(FIELD_DEFAULTS[key])


def parse_mode(value: Any) -> DOEMode:
    """Parse the mode discriminant.

    Raises:
        ValueError: If the mode is not a supported DOE type
    """
    if _is_missing(value):
        return DEFAULT_MODE
    try:
        return DOEMode(str(value))
    except ValueError:
        supported = ', '.join(m.value for m in DOEMode)
        raise ValueError(f"Unknown DOE mode: {value}. Supported modes: {supported}")


def _target_spec(data: Mapping[str, Any], mode: DOEMode) -> TargetSpec:
    keys = TARGET_KEYS[mode]
    # Older templates store every mode's target under the generic keys
    fb = GENERIC_TARGET_KEYS if keys is not GENERIC_TARGET_KEYS else None

    def fallback(attr):
        return (getattr(fb, attr),) if fb else ()

    return TargetSpec(
        target_type=_get_enum(data, TargetType, keys.target_type, *fallback('target_type')),
        target_size=_get_str(data, keys.target_size, *fallback('target_size')),
        target_angle=_get_str(data, keys.target_angle, *fallback('target_angle')),
        tolerance=_get_str(data, keys.tolerance, *fallback('tolerance')),
    )


def _splitter_count(data: Mapping[str, Any]) -> str:
    if not _is_missing(data.get('splitterCount')):
        return str(data['splitterCount'])
    # Line splitter templates describe the line as a 1 x N array
    rows = parse_count(data.get('arrayRows'))
    cols = parse_count(data.get('arrayCols'))
    if rows and cols and rows > 0 and cols > 0:
        return str(rows * cols)
    return FIELD_DEFAULTS['splitterCount']


def _pattern_info(value: Any) -> Optional[PatternInfo]:
    if not isinstance(value, Mapping):
        return None
    try:
        info = PatternInfo(
            max_pixel_value=int(value['maxPixelValue']),
            brightness_percent=float(value['brightnessPercent']),
            width=int(value['width']),
            height=int(value['height']),
        )
    except (KeyError, TypeError, ValueError):
        return None
    # A processed pattern is at least 1x1
    if info.width < 1 or info.height < 1:
        return None
    return info


def from_dict(data: Mapping[str, Any]) -> DOEParams:
    """Build a typed parameter record, filling defaults for missing fields.

    Args:
        data: Flat camelCase mapping (stored JSON or form state)

    Returns:
        The mode-specific DOEParams subclass instance

    Raises:
        ValueError: If ``mode`` is not a supported DOE type
    """
    mode = parse_mode(data.get('mode'))

    common = dict(
        working_distance=_get_str(data, 'workingDistance'),
        working_distance_unit=_get_str(data, 'workingDistanceUnit'),
        wavelength=_get_str(data, 'wavelength'),
        device_diameter=_get_str(data, 'deviceDiameter'),
        device_shape=_get_enum(data, DeviceShape, 'deviceShape'),
        fabrication_enabled=_get_bool(data, 'fabricationEnabled'),
        fabrication_recipe=_get_str(data, 'fabricationRecipe'),
    )

    if mode == DOEMode.DIFFUSER:
        return DiffuserParams(
            **common,
            diffuser_shape=_get_enum(data, DeviceShape, 'diffuserShape'),
            target=_target_spec(data, mode),
        )

    if mode == DOEMode.SPLITTER_1D:
        return SplitterParams(
            **common,
            splitter_count=_splitter_count(data),
            target=_target_spec(data, mode),
        )

    if mode == DOEMode.SPOT_PROJECTOR_2D:
        return SpotProjectorParams(
            **common,
            array_rows=_get_str(data, 'arrayRows'),
            array_cols=_get_str(data, 'arrayCols'),
            target=_target_spec(data, mode),
        )

    if mode == DOEMode.LENS:
        return LensParams(
            **common,
            focal_length=_get_str(data, 'lensFocalLength'),
            lens_type=_get_enum(data, LensType, 'lensType'),
            special_function=_get_enum(data, SpecialFunction, 'lensSpecialFunction'),
            extended_dof=_get_str(data, 'lensExtendedDOF'),
            multi_wavelength=_get_str(data, 'lensMultiWavelength'),
        )

    if mode == DOEMode.LENS_ARRAY:
        return LensArrayParams(
            **common,
            array_size=_get_str(data, 'lensArraySize'),
            focal_length=_get_str(data, 'lensArrayFocalLength'),
            lens_type=_get_enum(data, LensType, 'lensArrayType'),
            special_function=_get_enum(data, SpecialFunction, 'lensArraySpecialFunction'),
            extended_dof=_get_str(data, 'lensArrayExtendedDOF'),
            multi_wavelength=_get_str(data, 'lensArrayMultiWavelength'),
        )

    if mode == DOEMode.PRISM:
        return PrismParams(
            **common,
            deflection_angle=_get_str(data, 'prismDeflectionAngle', 'targetAngle'),
            tolerance=_get_str(data, 'prismTolerance', 'tolerance'),
        )

    return CustomParams(
        **common,
        pattern_preset=_get_enum(data, PatternPreset, 'customPatternPreset'),
        resize_mode=_get_enum(data, ResizeMode, 'customResizeMode'),
        resize_percentage=_get_str(data, 'customResizePercentage'),
        resize_width=_get_str(data, 'customResizeWidth'),
        resize_height=_get_str(data, 'customResizeHeight'),
        pattern_preview=data.get('customPatternPreview') or None,
        pattern_info=_pattern_info(data.get('customPatternInfo')),
        target=_target_spec(data, mode),
    )


def normalize(params: DOEParams) -> DOEParams:
    """Enforce the working-distance / target-type coupling.

    A size target is undefined at infinite distance, so it is switched to
    an angle target. Returns a new record; the input is not modified.
    """
    target = params.target_spec
    if params.is_infinite_distance and target is not None and target.target_type == TargetType.SIZE:
        return replace(params, target=replace(target, target_type=TargetType.ANGLE))
    return params


def normalize_dict(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Dict-level normalization for stored blobs.

    Forces every target-type field present in the blob (for all modes, not
    only the active one) to 'angle' when the working distance is infinite.
    """
    result = dict(data)
    if is_infinite_distance(_get(result, 'workingDistance')):
        for key in TARGET_TYPE_KEYS:
            if result.get(key) == TargetType.SIZE.value:
                result[key] = TargetType.ANGLE.value
    return result


def load_params(data: Mapping[str, Any]) -> DOEParams:
    """Fill defaults and normalize; the entry point for all stored/form input."""
    return normalize(from_dict(normalize_dict(data)))


def _target_to_dict(params: DOEParams) -> Dict[str, Any]:
    target = params.target_spec
    keys = TARGET_KEYS[params.mode]
    return {
        keys.target_type: target.target_type.value,
        keys.target_size: target.target_size,
        keys.target_angle: target.target_angle,
        keys.tolerance: target.tolerance,
    }


def to_dict(params: DOEParams) -> Dict[str, Any]:
    """Serialize a parameter record back to the stored camelCase shape."""
    result: Dict[str, Any] = {
        'mode': params.mode.value,
        'workingDistance': params.working_distance,
        'workingDistanceUnit': params.working_distance_unit,
        'wavelength': params.wavelength,
        'deviceDiameter': params.device_diameter,
        'deviceShape': params.device_shape.value,
        'fabricationEnabled': params.fabrication_enabled,
        'fabricationRecipe': params.fabrication_recipe,
    }

    if params.target_spec is not None:
        result.update(_target_to_dict(params))

    if isinstance(params, DiffuserParams):
        result['diffuserShape'] = params.diffuser_shape.value
    elif isinstance(params, SplitterParams):
        result['splitterCount'] = params.splitter_count
    elif isinstance(params, SpotProjectorParams):
        result['arrayRows'] = params.array_rows
        result['arrayCols'] = params.array_cols
    elif isinstance(params, LensArrayParams):
        result.update({
            'lensArraySize': params.array_size,
            'lensArrayFocalLength': params.focal_length,
            'lensArrayType': params.lens_type.value,
            'lensArraySpecialFunction': params.special_function.value,
            'lensArrayExtendedDOF': params.extended_dof,
            'lensArrayMultiWavelength': params.multi_wavelength,
        })
    elif isinstance(params, LensParams):
        result.update({
            'lensFocalLength': params.focal_length,
            'lensType': params.lens_type.value,
            'lensSpecialFunction': params.special_function.value,
            'lensExtendedDOF': params.extended_dof,
            'lensMultiWavelength': params.multi_wavelength,
        })
    elif isinstance(params, PrismParams):
        result['prismDeflectionAngle'] = params.deflection_angle
        result['prismTolerance'] = params.tolerance
    elif isinstance(params, CustomParams):
        result.update({
            'customPatternPreset': params.pattern_preset.value,
            'customResizeMode': params.resize_mode.value,
            'customResizePercentage': params.resize_percentage,
            'customResizeWidth': params.resize_width,
            'customResizeHeight': params.resize_height,
        })
        if params.pattern_preview:
            result['customPatternPreview'] = params.pattern_preview
        if params.pattern_info is not None:
            info = params.pattern_info
            result['customPatternInfo'] = {
                'maxPixelValue': info.max_pixel_value,
                'brightnessPercent': info.brightness_percent,
                'width': info.width,
                'height': info.height,
            }

    return result
