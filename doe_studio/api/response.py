"""
Preview and optimization response data structures.

All structures serialize to the camelCase JSON shape stored on a design
(``previewData`` / ``optimizationResult``) and rendered by the frontend.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import numpy as np


@dataclass
class PreviewSummary:
    """Derived, read-only summary of a parameter set.

    Attributes:
        total_spots: Number of target elements (spots, splits, pixels)
        pixel_pitch: Resolution element size across the aperture, e.g. "0.254 mm"
        diffraction_angle: Max diffraction half-angle, e.g. "15.00°"
        full_angle: Full angle, e.g. "30.00°"
        estimated_efficiency: Heuristic efficiency range
        computation_time: Heuristic optimization time
        doe_mode: Mode the summary was computed for
        equivalent_full_angle: Full angle derived from target size and distance
        actual_tolerance: Tolerance in angle or size units
        min_tolerance: Diffraction-limited minimum tolerance, e.g. "0.245%"
        effective_pixels: Max effective pixels (custom / diffuser)
        max_splits: Max number of splits (1D splitter)
        max_array_size: Max N of an N x N spot array (2D spot projector)
        reference_dof: Reference depth of focus (lens / lens array)
    """
    total_spots: int
    pixel_pitch: str
    diffraction_angle: str
    full_angle: str
    estimated_efficiency: str
    computation_time: str
    doe_mode: str
    equivalent_full_angle: Optional[str] = None
    actual_tolerance: Optional[str] = None
    min_tolerance: Optional[str] = None
    effective_pixels: Optional[int] = None
    max_splits: Optional[int] = None
    max_array_size: Optional[int] = None
    reference_dof: Optional[str] = None

    _JSON_KEYS = {
        'total_spots': 'totalSpots',
        'pixel_pitch': 'pixelPitch',
        'diffraction_angle': 'diffractionAngle',
        'full_angle': 'fullAngle',
        'estimated_efficiency': 'estimatedEfficiency',
        'computation_time': 'computationTime',
        'doe_mode': 'doeMode',
        'equivalent_full_angle': 'equivalentFullAngle',
        'actual_tolerance': 'actualTolerance',
        'min_tolerance': 'minTolerance',
        'effective_pixels': 'effectivePixels',
        'max_splits': 'maxSplits',
        'max_array_size': 'maxArraySize',
        'reference_dof': 'referenceDOF',
    }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result = {}
        for attr, key in self._JSON_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result


@dataclass
class PreviewData:
    """Preview summary plus advisory warnings.

    Attributes:
        summary: Computed summary
        warnings: Warning strings, in rule order
        invalid_fields: JSON names of fields that could not be parsed and
            were replaced by their defaults
    """
    summary: PreviewSummary
    warnings: List[str] = field(default_factory=list)
    invalid_fields: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.invalid_fields

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'isValid': self.is_valid,
            'summary': self.summary.to_dict(),
            'warnings': list(self.warnings),
        }
        if self.invalid_fields:
            result['invalidFields'] = list(self.invalid_fields)
        return result


@dataclass
class EfficiencyData:
    """Efficiency statistics of an optimized DOE (fractions, 0-1)."""
    total_efficiency: float
    uniformity_error: float
    zeroth_order_leakage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalEfficiency': self.total_efficiency,
            'uniformityError': self.uniformity_error,
            'zerothOrderLeakage': self.zeroth_order_leakage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EfficiencyData':
        return cls(
            total_efficiency=float(data['totalEfficiency']),
            uniformity_error=float(data['uniformityError']),
            zeroth_order_leakage=float(data['zerothOrderLeakage']),
        )


@dataclass
class OptimizationResultData:
    """Optimization result in JSON-serializable format.

    Array data is held as nested lists.

    Attributes:
        phase_map: Phase map [H, W], 8-bit range values (0-255)
        target_intensity: Target intensity [rows, cols] (normalized)
        actual_intensity: Simulated intensity [rows, cols] (normalized)
        order_energies: Per-order energies as {'order': '-5', 'energy': 0.9}
        efficiency: Efficiency statistics
    """
    phase_map: List[List[int]]
    target_intensity: List[List[float]]
    actual_intensity: List[List[float]]
    order_energies: List[Dict[str, Any]]
    efficiency: EfficiencyData

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'phaseMap': self.phase_map,
            'targetIntensity': self.target_intensity,
            'actualIntensity': self.actual_intensity,
            'orderEnergies': self.order_energies,
            'efficiency': self.efficiency.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OptimizationResultData':
        """Rebuild from the stored JSON shape.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            phase_map=data['phaseMap'],
            target_intensity=data['targetIntensity'],
            actual_intensity=data['actualIntensity'],
            order_energies=list(data['orderEnergies']),
            efficiency=EfficiencyData.from_dict(data['efficiency']),
        )

    @classmethod
    def from_arrays(
        cls,
        phase_map: np.ndarray,
        target_intensity: np.ndarray,
        actual_intensity: np.ndarray,
        order_energies: np.ndarray,
        efficiency: EfficiencyData,
    ) -> 'OptimizationResultData':
        """Create from numpy arrays (converts to lists).

        Args:
            phase_map: Integer phase map array
            target_intensity: Target intensity array
            actual_intensity: Simulated intensity array
            order_energies: 1D array of energies for orders -N..N
            efficiency: Efficiency statistics

        Returns:
            OptimizationResultData instance with list data
        """
        half = len(order_energies) // 2
        orders = [
            {'order': str(i - half), 'energy': float(energy)}
            for i, energy in enumerate(order_energies)
        ]
        return cls(
            phase_map=np.asarray(phase_map).astype(int).tolist(),
            target_intensity=np.asarray(target_intensity, dtype=float).tolist(),
            actual_intensity=np.asarray(actual_intensity, dtype=float).tolist(),
            order_energies=orders,
            efficiency=efficiency,
        )

    def get_array(self, name: str) -> np.ndarray:
        """Array field by export name ('phase', 'target', 'actual')."""
        arrays = {
            'phase': self.phase_map,
            'target': self.target_intensity,
            'actual': self.actual_intensity,
        }
        if name not in arrays:
            raise ValueError(f"Unknown data type: {name}")
        return np.asarray(arrays[name], dtype=float)
