"""Progress reporting and cancellation for long-running optimizations."""

from .progress import (
    TIMEOUT_REASON,
    ProgressInfo,
    CancellationToken,
    StepReporter,
)

__all__ = [
    "TIMEOUT_REASON",
    "ProgressInfo",
    "CancellationToken",
    "StepReporter",
]
