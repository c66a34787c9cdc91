"""
Progress reporting and cancellation support.

This module provides:
- ProgressInfo: Progress of a running optimization step loop
- CancellationToken: Thread-safe cancellation mechanism
- StepReporter: Emits ProgressInfo per step and checks cancellation
"""

from dataclasses import dataclass
from typing import Callable, Optional
import time
import threading

from ..api.errors import OptimizationCancelled, OptimizationTimeout


# Cancellation reason used when a task exceeds its time bound
TIMEOUT_REASON = "timeout"


@dataclass
class ProgressInfo:
    """Progress information for frontend display.

    Attributes:
        stage: Current stage name
        current_step: Steps completed so far
        total_steps: Total number of steps
        elapsed_seconds: Time elapsed since stage start
        estimated_remaining_seconds: Estimated time remaining
    """
    stage: str
    current_step: int
    total_steps: int
    elapsed_seconds: float
    estimated_remaining_seconds: float

    @property
    def progress_percent(self) -> float:
        """Get progress as percentage (0-100)."""
        if self.total_steps <= 0:
            return 0.0
        return 100.0 * self.current_step / self.total_steps

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'stage': self.stage,
            'current_step': self.current_step,
            'total_steps': self.total_steps,
            'progress_percent': self.progress_percent,
            'elapsed_seconds': self.elapsed_seconds,
            'estimated_remaining_seconds': self.estimated_remaining_seconds,
        }


class CancellationToken:
    """Thread-safe cancellation token.

    Used to signal that an optimization should stop, either on user
    request or because it exceeded its time bound.

    Example:
        token = CancellationToken()

        # In the task manager
        token.cancel("User requested cancellation")

        # In the optimization loop
        token.raise_if_cancelled()
    """

    def __init__(self):
        self._cancelled = threading.Event()
        self._cancel_reason: Optional[str] = None
        self._lock = threading.Lock()

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. The first reason given is kept."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancel_reason = reason
            self._cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._cancel_reason

    @property
    def timed_out(self) -> bool:
        return self.is_cancelled and self._cancel_reason == TIMEOUT_REASON

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for cancellation.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            True if cancelled, False if timeout
        """
        return self._cancelled.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise the matching exception if cancellation was requested.

        Raises:
            OptimizationTimeout: If cancelled with the timeout reason
            OptimizationCancelled: If cancelled for any other reason
        """
        if not self.is_cancelled:
            return
        if self.timed_out:
            raise OptimizationTimeout("Optimization exceeded its time limit")
        raise OptimizationCancelled(self._cancel_reason or "Cancelled")


class StepReporter:
    """Reports progress for a fixed number of steps.

    Example:
        reporter = StepReporter(total_steps=10, callback=on_progress,
                                cancellation_token=token)
        for step in range(10):
            reporter.check()
            ...  # do one step
            reporter.report(step + 1)
    """

    def __init__(
        self,
        total_steps: int,
        callback: Optional[Callable[[ProgressInfo], None]] = None,
        cancellation_token: Optional[CancellationToken] = None,
        stage: str = "optimize"
    ):
        self.total_steps = total_steps
        self.callback = callback
        self.cancellation_token = cancellation_token
        self.stage = stage
        self.start_time = time.time()

    def check(self) -> None:
        """Raise if the token has been cancelled."""
        if self.cancellation_token is not None:
            self.cancellation_token.raise_if_cancelled()

    def report(self, current_step: int) -> ProgressInfo:
        elapsed = time.time() - self.start_time
        if current_step > 0:
            remaining = elapsed / current_step * (self.total_steps - current_step)
        else:
            remaining = 0.0

        info = ProgressInfo(
            stage=self.stage,
            current_step=current_step,
            total_steps=self.total_steps,
            elapsed_seconds=elapsed,
            estimated_remaining_seconds=remaining,
        )
        if self.callback:
            self.callback(info)
        return info

    def sleep(self, seconds: float) -> None:
        """Wait up to ``seconds``, waking early and raising on cancellation."""
        if self.cancellation_token is None:
            time.sleep(seconds)
            return
        self.cancellation_token.wait(seconds)
        self.check()
