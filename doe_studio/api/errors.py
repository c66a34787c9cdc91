"""
Error codes and exception types.

Codes are stable strings used in validation messages and API payloads.
The optimization exceptions carry a ``retryable`` flag that the web layer
forwards to the client.
"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error codes for validation failures."""
    INVALID_QUANTITY = "INVALID_QUANTITY"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    UNKNOWN_MODE = "UNKNOWN_MODE"


class WarningCode(str, Enum):
    """Warning codes for non-fatal issues."""
    LARGE_ANGLE = "LARGE_ANGLE"
    TOLERANCE_TIGHT = "TOLERANCE_TIGHT"
    LARGE_COMPUTATION = "LARGE_COMPUTATION"
    TOLERANCE_BELOW_LIMIT = "TOLERANCE_BELOW_LIMIT"
    TARGET_TYPE_CORRECTED = "TARGET_TYPE_CORRECTED"


class OptimizationError(Exception):
    """Base class for optimization failures.

    Attributes:
        retryable: Whether re-running the same request may succeed
    """
    retryable: bool = False

    def __init__(self, message: str, retryable: Optional[bool] = None):
        super().__init__(message)
        if retryable is not None:
            self.retryable = retryable


class OptimizationCancelled(OptimizationError):
    """Raised inside an optimizer when its cancellation token fires."""
    retryable = True


class OptimizationTimeout(OptimizationError):
    """The optimization exceeded its time bound."""
    retryable = True


class OptimizationInProgressError(OptimizationError):
    """An optimization for the same design is already running."""

    def __init__(self, design_id: int, task_id: str):
        super().__init__(
            f"Optimization already running for design {design_id} (task {task_id})",
            retryable=True,
        )
        self.design_id = design_id
        self.task_id = task_id
