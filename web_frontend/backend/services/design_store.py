"""
In-memory design and template stores.

Designs are owned by a user id and carry their parameter blob, the last
preview and the last optimization result as opaque JSON. Reads return
deep copies so callers never see a record change under them.
"""

import copy
import itertools
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from doe_studio.params.loader import normalize_dict


class DesignStatus(str, Enum):
    """Design status enumeration."""
    DRAFT = "draft"
    OPTIMIZED = "optimized"


@dataclass
class Design:
    """Stored DOE design."""
    id: int
    user_id: str
    name: str
    mode: str
    status: DesignStatus = DesignStatus.DRAFT
    parameters: Optional[Dict[str, Any]] = None
    preview_data: Optional[Dict[str, Any]] = None
    optimization_result: Optional[Dict[str, Any]] = None
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def params_dict(self) -> Dict[str, Any]:
        """Parameter blob with the design's mode filled in if missing."""
        data = dict(self.parameters or {})
        data.setdefault('mode', self.mode)
        return data

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'userId': self.user_id,
            'name': self.name,
            'mode': self.mode,
            'status': self.status.value,
            'parameters': self.parameters,
            'previewData': self.preview_data,
            'optimizationResult': self.optimization_result,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }


@dataclass
class Template:
    """Pre-configured parameter set that designs can be created from."""
    id: int
    name: str
    mode: str
    parameters: Dict[str, Any]
    description: Optional[str] = None
    category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'mode': self.mode,
            'category': self.category,
            'parameters': self.parameters,
            'thumbnailUrl': self.thumbnail_url,
            'isActive': self.is_active,
            'displayOrder': self.display_order,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }


# Column name -> attribute for partial updates
_DESIGN_FIELDS = {
    'name': 'name',
    'mode': 'mode',
    'status': 'status',
    'parameters': 'parameters',
    'previewData': 'preview_data',
    'previewSummary': 'preview_data',
    'optimizationResult': 'optimization_result',
}

_TEMPLATE_FIELDS = {
    'name': 'name',
    'description': 'description',
    'mode': 'mode',
    'category': 'category',
    'parameters': 'parameters',
    'thumbnailUrl': 'thumbnail_url',
    'isActive': 'is_active',
    'displayOrder': 'display_order',
}


def _normalized(parameters: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if parameters is None:
        return None
    return normalize_dict(copy.deepcopy(parameters))


class DesignStore:
    """Thread-safe in-memory design store."""

    def __init__(self):
        self._designs: Dict[int, Design] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _touch(self, design: Design) -> None:
        # Strictly increasing so that list order follows update order
        now = time.time()
        design.updated_at = max(now, design.updated_at + 1e-6)

    def _owned(self, design_id: int, user_id: Optional[str]) -> Optional[Design]:
        design = self._designs.get(design_id)
        if design is None or (user_id is not None and design.user_id != user_id):
            return None
        return design

    def create(
        self,
        user_id: str,
        name: str,
        mode: str,
        parameters: Optional[Dict[str, Any]] = None
    ) -> Design:
        with self._lock:
            design = Design(
                id=next(self._ids),
                user_id=user_id,
                name=name,
                mode=mode,
                parameters=_normalized(parameters),
            )
            self._designs[design.id] = design
            return copy.deepcopy(design)

    def list(self, user_id: str) -> List[Design]:
        """Designs of a user, most recently updated first."""
        with self._lock:
            designs = [d for d in self._designs.values() if d.user_id == user_id]
            designs.sort(key=lambda d: (d.updated_at, d.id), reverse=True)
            return copy.deepcopy(designs)

    def get(self, design_id: int, user_id: Optional[str] = None) -> Optional[Design]:
        """Get a design; with ``user_id`` only if that user owns it."""
        with self._lock:
            design = self._owned(design_id, user_id)
            return copy.deepcopy(design) if design else None

    def update(self, design_id: int, user_id: Optional[str], updates: Dict[str, Any]) -> Optional[Design]:
        """Apply a partial update given in camelCase column names.

        Unknown keys are ignored. Returns the updated design, or None if it
        does not exist or is not owned by ``user_id``.
        """
        with self._lock:
            design = self._owned(design_id, user_id)
            if design is None:
                return None
            for key, value in updates.items():
                attr = _DESIGN_FIELDS.get(key)
                if attr is None:
                    continue
                if attr == 'status':
                    value = DesignStatus(value)
                elif attr == 'parameters':
                    value = _normalized(value)
                else:
                    value = copy.deepcopy(value)
                setattr(design, attr, value)
            self._touch(design)
            return copy.deepcopy(design)

    def delete(self, design_id: int, user_id: Optional[str] = None) -> bool:
        with self._lock:
            if self._owned(design_id, user_id) is None:
                return False
            del self._designs[design_id]
            return True

    def save(self, design_id: int, slots: Dict[str, Any]) -> bool:
        """Replace result slots atomically.

        Args:
            design_id: Design to update
            slots: Any of 'parameters', 'previewData' (alias
                'previewSummary'), 'optimizationResult', 'status'

        Returns:
            False if the design no longer exists
        """
        return self.update(design_id, None, slots) is not None

    def load(self, design_id: int) -> Optional[Dict[str, Any]]:
        """Parameter blob, preview and optimization result of a design."""
        design = self.get(design_id)
        if design is None:
            return None
        return {
            'parameters': design.params_dict(),
            'previewSummary': design.preview_data,
            'optimizationResult': design.optimization_result,
        }

    def create_from_template(
        self,
        user_id: str,
        template: Template,
        name: Optional[str] = None
    ) -> Design:
        return self.create(
            user_id=user_id,
            name=name or f"{template.name} Copy",
            mode=template.mode,
            parameters=template.parameters,
        )


SEED_TEMPLATES: List[Dict[str, Any]] = [
    {
        'name': "50×50 Spot Array",
        'description': "Standard 50×50 spot projector for structured light applications. "
                       "Suitable for 3D scanning and depth sensing.",
        'mode': "2d_spot_projector",
        'category': "spot_projector",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "850nm",
            'deviceDiameter': "12.7mm", 'deviceShape': "circular",
            'arrayRows': "50", 'arrayCols': "50",
            'targetType': "angle", 'targetAngle': "30deg", 'tolerance': "1",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "100×100 High-Density Array",
        'description': "High-density 100×100 spot array for precision structured light. "
                       "Ideal for high-resolution 3D reconstruction.",
        'mode': "2d_spot_projector",
        'category': "spot_projector",
        'parameters': {
            'workingDistance': "1m", 'workingDistanceUnit': "m", 'wavelength': "940nm",
            'deviceDiameter': "25mm", 'deviceShape': "square",
            'arrayRows': "100", 'arrayCols': "100",
            'targetType': "size", 'targetSize': "500mm", 'tolerance': "2",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "1D Line Splitter (1×7)",
        'description': "One-dimensional beam splitter creating 7 uniform spots in a line. "
                       "Common for laser line generation.",
        'mode': "1d_splitter",
        'category': "splitter",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "532nm",
            'deviceDiameter': "12.7mm", 'deviceShape': "circular",
            'arrayRows': "1", 'arrayCols': "7",
            'targetType': "angle", 'targetAngle': "20deg", 'tolerance': "1",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "Gaussian Diffuser (10°)",
        'description': "Gaussian beam homogenizer with 10° full divergence angle. "
                       "Creates uniform circular illumination.",
        'mode': "diffuser",
        'category': "diffuser",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "632.8nm",
            'deviceDiameter': "25mm", 'deviceShape': "circular",
            'targetType': "angle", 'targetAngle': "10deg", 'tolerance': "5",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "Square Diffuser (20°×20°)",
        'description': "Square-shaped beam homogenizer with 20°×20° divergence. "
                       "Ideal for rectangular illumination areas.",
        'mode': "diffuser",
        'category': "diffuser",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "450nm",
            'deviceDiameter': "12.7mm", 'deviceShape': "square",
            'targetType': "angle", 'targetAngle': "20deg", 'tolerance': "5",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "Diffractive Lens (f=100mm)",
        'description': "Diffractive focusing lens with 100mm focal length. "
                       "Lightweight alternative to refractive optics.",
        'mode': "lens",
        'category': "lens",
        'parameters': {
            'workingDistance': "100mm", 'workingDistanceUnit': "mm", 'wavelength': "532nm",
            'deviceDiameter': "25mm", 'deviceShape': "circular",
            'lensFocalLength': "100mm",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "5° Beam Deflector",
        'description': "Diffractive prism for 5° beam deflection. Useful for beam steering applications.",
        'mode': "prism",
        'category': "prism",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "1064nm",
            'deviceDiameter': "12.7mm", 'deviceShape': "circular",
            'targetType': "angle", 'targetAngle': "5deg",
            'fabricationEnabled': False,
        },
    },
    {
        'name': "LiDAR Pattern (31×31)",
        'description': "Optimized spot pattern for automotive LiDAR applications. "
                       "31×31 array with wide field of view.",
        'mode': "2d_spot_projector",
        'category': "spot_projector",
        'parameters': {
            'workingDistance': "inf", 'workingDistanceUnit': "mm", 'wavelength': "905nm",
            'deviceDiameter': "6mm", 'deviceShape': "circular",
            'arrayRows': "31", 'arrayCols': "31",
            'targetType': "angle", 'targetAngle': "60deg", 'tolerance': "3",
            'fabricationEnabled': True, 'fabricationRecipe': "multilevel8",
        },
    },
]


class TemplateStore:
    """Thread-safe in-memory template store."""

    def __init__(self, seed: bool = True):
        self._templates: Dict[int, Template] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        if seed:
            for order, entry in enumerate(SEED_TEMPLATES):
                self.create(display_order=order, **copy.deepcopy(entry))

    def create(
        self,
        name: str,
        mode: str,
        parameters: Dict[str, Any],
        description: Optional[str] = None,
        category: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        display_order: int = 0
    ) -> Template:
        with self._lock:
            template = Template(
                id=next(self._ids),
                name=name,
                mode=mode,
                parameters=_normalized(parameters),
                description=description,
                category=category,
                thumbnail_url=thumbnail_url,
                display_order=display_order,
            )
            self._templates[template.id] = template
            return copy.deepcopy(template)

    def list_active(self) -> List[Template]:
        """Active templates by display order."""
        with self._lock:
            templates = [t for t in self._templates.values() if t.is_active]
            templates.sort(key=lambda t: (t.display_order, t.id))
            return copy.deepcopy(templates)

    def get(self, template_id: int) -> Optional[Template]:
        with self._lock:
            template = self._templates.get(template_id)
            return copy.deepcopy(template) if template else None

    def update(self, template_id: int, updates: Dict[str, Any]) -> Optional[Template]:
        with self._lock:
            template = self._templates.get(template_id)
            if template is None:
                return None
            for key, value in updates.items():
                attr = _TEMPLATE_FIELDS.get(key)
                if attr is None:
                    continue
                if attr == 'parameters':
                    value = _normalized(value)
                setattr(template, attr, copy.deepcopy(value))
            template.updated_at = time.time()
            return copy.deepcopy(template)

    def delete(self, template_id: int) -> bool:
        with self._lock:
            return self._templates.pop(template_id, None) is not None


# Global store instances
design_store = DesignStore()
template_store = TemplateStore()
