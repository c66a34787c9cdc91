"""
Mock optimizer.

Produces result data of the same shape as a real optimizer without
solving anything: a synthetic spiral phase map, noisy intensity on the
mode's target grid, per-order energies and efficiency figures. Random
values come from a numpy Generator seeded per call, so a fixed seed gives
identical results.
"""

from typing import Optional, Tuple
import numpy as np

from ..api.response import EfficiencyData, OptimizationResultData
from ..params.base import DOEParams
from ..pipeline.progress import CancellationToken, StepReporter
from ..preview.resolved import resolve_params
from .base import Optimizer, ProgressCallback


PHASE_MAP_SIZE = 256
NUM_ORDERS = 11
ZEROTH_ORDER_ENERGY = 0.02
# Keeps the JSON payload of large custom patterns bounded
MAX_INTENSITY_SIDE = 512


def spiral_phase_map(size: int = PHASE_MAP_SIZE) -> np.ndarray:
    """8-bit spiral phase pattern ``floor((sin(20r + 3*theta) + 1) * 127.5)``."""
    i, j = np.indices((size, size))
    x = (j - size / 2) / size
    y = (i - size / 2) / size
    r = np.sqrt(x * x + y * y)
    theta = np.arctan2(y, x)
    return np.floor((np.sin(r * 20 + theta * 3) + 1) * 127.5).astype(np.int64)


def noisy_intensity(rng: np.random.Generator, shape: Tuple[int, int]) -> np.ndarray:
    """Unit intensity with +/-5% uniform noise."""
    return 1.0 + (rng.random(shape) - 0.5) * 0.1


def order_energies(rng: np.random.Generator, count: int = NUM_ORDERS) -> np.ndarray:
    """Energies for orders -count//2 .. count//2; the zeroth order is suppressed."""
    energies = 0.8 + rng.random(count) * 0.2
    energies[count // 2] = ZEROTH_ORDER_ENERGY
    return energies


class MockOptimizer(Optimizer):
    """Stub optimizer that waits ``duration_seconds`` and returns synthetic data.

    Args:
        seed: Seed for the random generator (None for fresh entropy)
        duration_seconds: Total simulated run time
        steps: Number of progress steps the duration is split into
    """

    name = "mock"

    def __init__(
        self,
        seed: Optional[int] = None,
        duration_seconds: float = 2.5,
        steps: int = 10,
        phase_map_size: int = PHASE_MAP_SIZE,
        num_orders: int = NUM_ORDERS
    ):
        self.seed = seed
        self.duration_seconds = max(duration_seconds, 0.0)
        self.steps = max(int(steps), 1)
        self.phase_map_size = phase_map_size
        self.num_orders = num_orders

    def _target_shape(self, params: DOEParams) -> Tuple[int, int]:
        rows, cols = resolve_params(params).grid_shape
        return min(rows, MAX_INTENSITY_SIDE), min(cols, MAX_INTENSITY_SIDE)

    def optimize(
        self,
        params: DOEParams,
        progress_callback: Optional[ProgressCallback] = None,
        cancellation_token: Optional[CancellationToken] = None
    ) -> OptimizationResultData:
        reporter = StepReporter(self.steps, progress_callback, cancellation_token, stage="mock")
        step_seconds = self.duration_seconds / self.steps

        reporter.report(0)
        for step in range(self.steps):
            reporter.check()
            if step_seconds > 0:
                reporter.sleep(step_seconds)
            reporter.report(step + 1)
        reporter.check()

        rng = np.random.default_rng(self.seed)
        shape = self._target_shape(params)

        target = np.ones(shape)
        actual = noisy_intensity(rng, shape)
        energies = order_energies(rng, self.num_orders)
        efficiency = EfficiencyData(
            total_efficiency=float(0.78 + rng.random() * 0.1),
            uniformity_error=float(0.02 + rng.random() * 0.03),
            zeroth_order_leakage=float(0.01 + rng.random() * 0.02),
        )

        return OptimizationResultData.from_arrays(
            phase_map=spiral_phase_map(self.phase_map_size),
            target_intensity=target,
            actual_intensity=actual,
            order_energies=energies,
            efficiency=efficiency,
        )
