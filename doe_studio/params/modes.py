"""
Mode-specific parameter records.

One dataclass per DOE mode; each carries only the fields that mode uses.
The ``mode`` class attribute is the discriminant stored in JSON.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Tuple, Type

from .base import (
    DOEMode,
    DOEParams,
    DeviceShape,
    LensType,
    PatternPreset,
    ResizeMode,
    SpecialFunction,
    TargetSpec,
)


@dataclass
class DiffuserParams(DOEParams):
    """Homogenizer producing a uniform patch of given shape and extent."""
    mode: ClassVar[DOEMode] = DOEMode.DIFFUSER

    diffuser_shape: DeviceShape = DeviceShape.CIRCULAR
    target: TargetSpec = field(default_factory=TargetSpec)


@dataclass
class SplitterParams(DOEParams):
    """1D beam splitter producing ``splitter_count`` spots on a line."""
    mode: ClassVar[DOEMode] = DOEMode.SPLITTER_1D

    splitter_count: str = '5'
    target: TargetSpec = field(default_factory=TargetSpec)


@dataclass
class SpotProjectorParams(DOEParams):
    """2D spot projector producing an ``array_rows`` x ``array_cols`` grid."""
    mode: ClassVar[DOEMode] = DOEMode.SPOT_PROJECTOR_2D

    array_rows: str = '50'
    array_cols: str = '50'
    target: TargetSpec = field(default_factory=TargetSpec)


@dataclass
class LensParams(DOEParams):
    """Diffractive lens.

    Attributes:
        focal_length: Focal length quantity
        lens_type: Spherical or cylindrical along x/y
        special_function: Optional extended DOF / multi-wavelength design
        extended_dof: Requested depth of focus (extended_dof only)
        multi_wavelength: Comma separated wavelengths (multi_wavelength only)
    """
    mode: ClassVar[DOEMode] = DOEMode.LENS

    focal_length: str = '50mm'
    lens_type: LensType = LensType.NORMAL
    special_function: SpecialFunction = SpecialFunction.NONE
    extended_dof: str = ''
    multi_wavelength: str = ''


@dataclass
class LensArrayParams(LensParams):
    """N x N microlens array; each lenslet spans ``diameter / N``."""
    mode: ClassVar[DOEMode] = DOEMode.LENS_ARRAY

    array_size: str = '5'


@dataclass
class PrismParams(DOEParams):
    """Beam deflector (blazed grating)."""
    mode: ClassVar[DOEMode] = DOEMode.PRISM

    deflection_angle: str = '10deg'
    tolerance: str = '1'

    @property
    def tolerance_field(self):
        return 'prismTolerance', self.tolerance


@dataclass
class PatternInfo:
    """Summary of a preprocessed custom pattern image."""
    max_pixel_value: int
    brightness_percent: float
    width: int
    height: int


@dataclass
class CustomParams(DOEParams):
    """Custom pattern from an uploaded image or a preset.

    The uploaded file itself is not part of the record; only its
    preprocessed summary and preview survive.
    """
    mode: ClassVar[DOEMode] = DOEMode.CUSTOM

    pattern_preset: PatternPreset = PatternPreset.NONE
    resize_mode: ResizeMode = ResizeMode.PERCENTAGE
    resize_percentage: str = '100'
    resize_width: str = ''
    resize_height: str = ''
    pattern_preview: Optional[str] = None
    pattern_info: Optional[PatternInfo] = None
    target: TargetSpec = field(default_factory=TargetSpec)

    @property
    def pattern_shape(self) -> Optional[Tuple[int, int]]:
        """(height, width) of the processed pattern, if one was loaded."""
        if self.pattern_info is None:
            return None
        return self.pattern_info.height, self.pattern_info.width


MODE_CLASSES: Dict[DOEMode, Type[DOEParams]] = {
    DOEMode.DIFFUSER: DiffuserParams,
    DOEMode.SPLITTER_1D: SplitterParams,
    DOEMode.SPOT_PROJECTOR_2D: SpotProjectorParams,
    DOEMode.LENS: LensParams,
    DOEMode.LENS_ARRAY: LensArrayParams,
    DOEMode.PRISM: PrismParams,
    DOEMode.CUSTOM: CustomParams,
}
