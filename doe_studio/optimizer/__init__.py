"""Optimizer capability and implementations."""

from typing import Optional

from .base import Optimizer, ProgressCallback
from .mock import MockOptimizer, spiral_phase_map


def create_optimizer(
    method: str = "mock",
    seed: Optional[int] = None,
    duration_seconds: float = 2.5
) -> Optimizer:
    """Create optimizer instance by name.

    Args:
        method: Optimizer name; only 'mock' is available
        seed: Random seed for the mock optimizer
        duration_seconds: Simulated run time of the mock optimizer

    Returns:
        Optimizer instance

    Raises:
        ValueError: For an unknown optimizer name
    """
    if method == "mock":
        return MockOptimizer(seed=seed, duration_seconds=duration_seconds)
    raise ValueError(f"Unknown optimizer: {method}")


__all__ = [
    "Optimizer",
    "ProgressCallback",
    "MockOptimizer",
    "spiral_phase_map",
    "create_optimizer",
]
