"""API data structures: error codes, exceptions and serializable results."""

from .errors import (
    ErrorCode,
    WarningCode,
    OptimizationError,
    OptimizationCancelled,
    OptimizationTimeout,
    OptimizationInProgressError,
)
from .response import (
    PreviewSummary,
    PreviewData,
    EfficiencyData,
    OptimizationResultData,
)

__all__ = [
    "ErrorCode",
    "WarningCode",
    "OptimizationError",
    "OptimizationCancelled",
    "OptimizationTimeout",
    "OptimizationInProgressError",
    "PreviewSummary",
    "PreviewData",
    "EfficiencyData",
    "OptimizationResultData",
]
