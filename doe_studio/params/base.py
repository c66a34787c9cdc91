"""
Parameter model base types.

Defines the DOE modes, the enumerations used by mode-specific fields, the
per-field defaults of the stored JSON shape, and the fields common to
every mode. Quantities are kept as the strings the user typed ("532nm",
"inf"); conversion to numbers happens in ``resolve.py``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict

from ..core.units import is_infinite_distance


class DOEMode(str, Enum):
    """Supported DOE types."""
    DIFFUSER = "diffuser"                    # Homogenizer / diffuser
    SPLITTER_1D = "1d_splitter"              # 1D beam splitter
    SPOT_PROJECTOR_2D = "2d_spot_projector"  # 2D spot array
    LENS = "lens"                            # Diffractive lens
    LENS_ARRAY = "lens_array"                # Microlens array
    PRISM = "prism"                          # Beam deflector
    CUSTOM = "custom"                        # Custom pattern from image


class TargetType(str, Enum):
    """How the target extent is specified."""
    SIZE = "size"    # Physical size at the working distance
    ANGLE = "angle"  # Full angle (only option at infinite distance)


class DeviceShape(str, Enum):
    CIRCULAR = "circular"
    SQUARE = "square"


class LensType(str, Enum):
    NORMAL = "normal"
    CYLINDRICAL_X = "cylindrical_x"
    CYLINDRICAL_Y = "cylindrical_y"


class SpecialFunction(str, Enum):
    NONE = "none"
    EXTENDED_DOF = "extended_dof"
    MULTI_WAVELENGTH = "multi_wavelength"


class PatternPreset(str, Enum):
    NONE = "none"
    CROSS = "cross"
    RING = "ring"
    GRID = "grid"


class ResizeMode(str, Enum):
    PERCENTAGE = "percentage"
    PIXELS = "pixels"


DEFAULT_MODE = DOEMode.SPOT_PROJECTOR_2D

# Defaults for every stored field, keyed by the JSON field name.
# Substituted for missing fields at load time and for unparseable values
# when quantities are resolved.
FIELD_DEFAULTS: Dict[str, Any] = {
    # Common
    'workingDistance': 'inf',
    'workingDistanceUnit': 'mm',
    'wavelength': '532nm',
    'deviceDiameter': '12.7mm',
    'deviceShape': DeviceShape.CIRCULAR.value,
    'fabricationEnabled': False,
    'fabricationRecipe': '',

    # 2D spot projector (also the generic target fields)
    'arrayRows': '50',
    'arrayCols': '50',
    'targetType': TargetType.ANGLE.value,
    'targetSize': '100mm',
    'targetAngle': '30deg',
    'tolerance': '1',

    # Diffuser
    'diffuserShape': DeviceShape.CIRCULAR.value,
    'diffuserTargetType': TargetType.ANGLE.value,
    'diffuserSize': '100mm',
    'diffuserAngle': '30deg',
    'diffuserTolerance': '1',

    # 1D splitter
    'splitterCount': '5',
    'splitterTargetType': TargetType.ANGLE.value,
    'splitterSize': '100mm',
    'splitterAngle': '30deg',
    'splitterTolerance': '1',

    # Lens
    'lensFocalLength': '50mm',
    'lensSpecialFunction': SpecialFunction.NONE.value,
    'lensExtendedDOF': '',
    'lensMultiWavelength': '',
    'lensType': LensType.NORMAL.value,

    # Lens array
    'lensArraySize': '5',
    'lensArrayFocalLength': '50mm',
    'lensArraySpecialFunction': SpecialFunction.NONE.value,
    'lensArrayExtendedDOF': '',
    'lensArrayMultiWavelength': '',
    'lensArrayType': LensType.NORMAL.value,

    # Prism
    'prismDeflectionAngle': '10deg',
    'prismTolerance': '1',

    # Custom pattern
    'customPatternPreset': PatternPreset.NONE.value,
    'customResizeMode': ResizeMode.PERCENTAGE.value,
    'customResizePercentage': '100',
    'customResizeWidth': '',
    'customResizeHeight': '',
    'customTargetType': TargetType.ANGLE.value,
    'customSize': '100mm',
    'customAngle': '30deg',
    'customTolerance': '1',
}


@dataclass(frozen=True)
class TargetKeys:
    """JSON field names of a mode's target specification."""
    target_type: str
    target_size: str
    target_angle: str
    tolerance: str


GENERIC_TARGET_KEYS = TargetKeys('targetType', 'targetSize', 'targetAngle', 'tolerance')

TARGET_KEYS: Dict[DOEMode, TargetKeys] = {
    DOEMode.SPOT_PROJECTOR_2D: GENERIC_TARGET_KEYS,
    DOEMode.DIFFUSER: TargetKeys(
        'diffuserTargetType', 'diffuserSize', 'diffuserAngle', 'diffuserTolerance'),
    DOEMode.SPLITTER_1D: TargetKeys(
        'splitterTargetType', 'splitterSize', 'splitterAngle', 'splitterTolerance'),
    DOEMode.CUSTOM: TargetKeys(
        'customTargetType', 'customSize', 'customAngle', 'customTolerance'),
}


@dataclass
class TargetSpec:
    """Target extent and tolerance for modes that shape a far-field pattern.

    Exactly one of ``target_size``/``target_angle`` is authoritative,
    selected by ``target_type``.

    Attributes:
        target_type: 'size' or 'angle'
        target_size: Target size quantity, e.g. "100mm"
        target_angle: Full target angle quantity, e.g. "30deg"
        tolerance: Tolerance in percent, e.g. "1"
    """
    target_type: TargetType = TargetType.ANGLE
    target_size: str = '100mm'
    target_angle: str = '30deg'
    tolerance: str = '1'

    @property
    def is_angle(self) -> bool:
        return self.target_type == TargetType.ANGLE


@dataclass
class DOEParams:
    """Fields shared by every DOE mode.

    Subclasses set the ``mode`` tag and add the fields relevant to that mode.

    Attributes:
        working_distance: Distance quantity or the "inf" sentinel
        working_distance_unit: Unit selector kept for display continuity
        wavelength: Wavelength quantity
        device_diameter: Device aperture quantity
        device_shape: Aperture shape
        fabrication_enabled: Whether the fabrication simulator is enabled
        fabrication_recipe: Selected fabrication recipe
    """
    mode: ClassVar[DOEMode]

    working_distance: str = 'inf'
    working_distance_unit: str = 'mm'
    wavelength: str = '532nm'
    device_diameter: str = '12.7mm'
    device_shape: DeviceShape = DeviceShape.CIRCULAR
    fabrication_enabled: bool = False
    fabrication_recipe: str = ''

    @property
    def is_infinite_distance(self) -> bool:
        return is_infinite_distance(self.working_distance)

    @property
    def target_spec(self):
        """Target specification, or None for modes without one."""
        return getattr(self, 'target', None)

    @property
    def tolerance_field(self):
        """(field name, value) of the user tolerance, or None."""
        target = self.target_spec
        if target is not None:
            return TARGET_KEYS[self.mode].tolerance, target.tolerance
        return None
