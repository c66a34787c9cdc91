"""
Parameter model.

One record type per DOE mode, a fill-defaults load boundary, and numeric
field resolution.
"""

from .base import (
    DOEMode,
    TargetType,
    DeviceShape,
    LensType,
    SpecialFunction,
    PatternPreset,
    ResizeMode,
    FIELD_DEFAULTS,
    TARGET_KEYS,
    TargetSpec,
    DOEParams,
)
from .modes import (
    DiffuserParams,
    SplitterParams,
    SpotProjectorParams,
    LensParams,
    LensArrayParams,
    PrismParams,
    CustomParams,
    PatternInfo,
    MODE_CLASSES,
)
from .loader import from_dict, load_params, normalize, normalize_dict, to_dict, parse_mode
from .resolve import FieldResolver
from .presets import all_presets

__all__ = [
    "DOEMode",
    "TargetType",
    "DeviceShape",
    "LensType",
    "SpecialFunction",
    "PatternPreset",
    "ResizeMode",
    "FIELD_DEFAULTS",
    "TARGET_KEYS",
    "TargetSpec",
    "DOEParams",
    "DiffuserParams",
    "SplitterParams",
    "SpotProjectorParams",
    "LensParams",
    "LensArrayParams",
    "PrismParams",
    "CustomParams",
    "PatternInfo",
    "MODE_CLASSES",
    "from_dict",
    "load_params",
    "normalize",
    "normalize_dict",
    "to_dict",
    "parse_mode",
    "FieldResolver",
    "all_presets",
]
