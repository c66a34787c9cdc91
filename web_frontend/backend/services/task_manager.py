"""
Task Manager for handling optimization tasks.

Provides:
- Task creation and tracking
- Background execution with ThreadPoolExecutor
- Single-flight per design: at most one running task per design id
- Per-task timeout and cancellation support
- Atomic replacement of the design's optimization result on success
"""

import threading
import time
import traceback
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from doe_studio import (
    CancellationToken,
    MockOptimizer,
    Optimizer,
    OptimizationCancelled,
    OptimizationError,
    OptimizationInProgressError,
    OptimizationTimeout,
    ProgressInfo,
    build_preview,
    load_params,
)
from doe_studio.params.base import DOEParams
from doe_studio.pipeline.progress import TIMEOUT_REASON

from ..config import config
from .design_store import Design, DesignStatus, DesignStore, design_store


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    FAILED = "failed"


FINISHED_STATUSES = (
    TaskStatus.COMPLETED,
    TaskStatus.CANCELLED,
    TaskStatus.TIMEOUT,
    TaskStatus.FAILED,
)


@dataclass
class OptimizationTask:
    """Represents an optimization task for one design."""
    task_id: str
    design_id: int
    status: TaskStatus = TaskStatus.PENDING
    progress: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    retryable: bool = False
    created_at: float = field(default_factory=time.time)
    completed_at: Optional[float] = None
    cancellation_token: CancellationToken = field(default_factory=CancellationToken)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES

    def update_progress(self, progress_info: ProgressInfo) -> None:
        """Thread-safe progress update."""
        with self._lock:
            self.progress = progress_info.to_dict()

    def finish(self, status: TaskStatus, error: Optional[str] = None, retryable: bool = False) -> None:
        with self._lock:
            self.status = status
            self.error = error
            self.retryable = retryable
            self.completed_at = time.time()

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            result = {
                'task_id': self.task_id,
                'design_id': self.design_id,
                'status': self.status.value,
                'created_at': self.created_at,
            }
            if self.progress is not None:
                result['progress'] = dict(self.progress)
            if self.error is not None:
                result['error'] = self.error
                result['retryable'] = self.retryable
            if self.completed_at is not None:
                result['completed_at'] = self.completed_at
            return result


def default_optimizer() -> Optimizer:
    return MockOptimizer(seed=config.mock_seed, duration_seconds=config.mock_duration_seconds)


class TaskManager:
    """Manages optimization tasks with single-flight execution per design."""

    def __init__(
        self,
        store: Optional[DesignStore] = None,
        optimizer: Optional[Optimizer] = None,
        max_concurrent: Optional[int] = None,
        timeout_seconds: Optional[float] = None
    ):
        """Initialize task manager.

        Args:
            store: Design store the results are written to
            optimizer: Optimizer used for every task
            max_concurrent: Maximum concurrent optimization tasks
            timeout_seconds: Time bound per task
        """
        self.store = store if store is not None else design_store
        self.optimizer = optimizer or default_optimizer()
        self.max_concurrent = max_concurrent or config.max_concurrent_tasks
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else config.optimize_timeout_seconds
        self.tasks: Dict[str, OptimizationTask] = {}
        self._active: Dict[int, str] = {}
        self.executor = ThreadPoolExecutor(max_workers=self.max_concurrent)
        self._lock = threading.Lock()

    def get_task(self, task_id: str) -> Optional[OptimizationTask]:
        """Get a task by ID."""
        return self.tasks.get(task_id)

    def active_task(self, design_id: int) -> Optional[OptimizationTask]:
        """The in-flight task of a design, if any."""
        with self._lock:
            task_id = self._active.get(design_id)
            return self.tasks.get(task_id) if task_id else None

    def submit(self, design: Design) -> OptimizationTask:
        """Start optimizing a design in a background thread.

        The parameter set is snapshotted now. If the design has no preview
        yet, the preview is computed and stored first.

        Raises:
            OptimizationInProgressError: If the design already has a task in flight
            ValueError: If the stored parameters name an unknown mode
        """
        params = load_params(design.params_dict())

        with self._lock:
            running_id = self._active.get(design.id)
            if running_id is not None:
                raise OptimizationInProgressError(design.id, running_id)

            task = OptimizationTask(task_id=str(uuid.uuid4())[:8], design_id=design.id)
            self.tasks[task.task_id] = task
            self._active[design.id] = task.task_id

        try:
            if design.preview_data is None:
                print(f"[Optimize] Running preview first for design {design.id}")
                preview = build_preview(params, config.pixel_ceiling)
                self.store.save(design.id, {'previewData': preview.to_dict()})
            self.executor.submit(self._run_optimization_sync, task, params)
        except Exception as e:
            # Nothing was queued, so the design must stay submittable
            with self._lock:
                self._active.pop(design.id, None)
                self.tasks.pop(task.task_id, None)
            print(f"[Optimize] Submit failed for design {design.id}: {e}")
            raise

        print(f"[Optimize] Task {task.task_id} queued for design {design.id}")
        return task

    def _run_optimization_sync(self, task: OptimizationTask, params: DOEParams) -> None:
        """Run optimization synchronously in a worker thread."""
        token = task.cancellation_token
        timer = threading.Timer(self.timeout_seconds, token.cancel, args=(TIMEOUT_REASON,))
        timer.daemon = True

        with task._lock:
            task.status = TaskStatus.RUNNING
        timer.start()

        status, error, retryable = TaskStatus.FAILED, None, False
        try:
            result = self.optimizer.optimize(
                params,
                progress_callback=task.update_progress,
                cancellation_token=token,
            )
            # An optimizer that ignores the token must not publish late results
            token.raise_if_cancelled()

            saved = self.store.save(task.design_id, {
                'optimizationResult': result.to_dict(),
                'status': DesignStatus.OPTIMIZED.value,
            })
            if saved:
                status = TaskStatus.COMPLETED
            else:
                error = "Design no longer exists"

        except OptimizationTimeout as e:
            status, error, retryable = TaskStatus.TIMEOUT, str(e), True

        except OptimizationCancelled as e:
            status, error, retryable = TaskStatus.CANCELLED, str(e), True

        except OptimizationError as e:
            error, retryable = str(e), e.retryable

        except Exception as e:
            traceback.print_exc()
            error, retryable = str(e), True

        finally:
            timer.cancel()
            # Release the design before publishing the final status
            with self._lock:
                if self._active.get(task.design_id) == task.task_id:
                    del self._active[task.design_id]
            task.finish(status, error, retryable)
            print(f"[Optimize] Task {task.task_id} for design {task.design_id}: {status.value}")

    def cancel_task(self, task_id: str) -> bool:
        """Cancel a running task.

        Args:
            task_id: Task ID to cancel

        Returns:
            True if cancellation was requested, False if task not found
        """
        task = self.tasks.get(task_id)
        if not task:
            return False

        task.cancellation_token.cancel("User requested cancellation")
        return True

    def cleanup_old_tasks(self, max_age_seconds: Optional[int] = None) -> int:
        """Clean up finished tasks older than max_age_seconds.

        Returns:
            Number of tasks removed
        """
        max_age = max_age_seconds if max_age_seconds is not None else config.task_cleanup_seconds
        current_time = time.time()

        with self._lock:
            to_remove = [
                task_id for task_id, task in self.tasks.items()
                if task.completed_at and (current_time - task.completed_at) > max_age
            ]
            for task_id in to_remove:
                del self.tasks[task_id]

        if to_remove:
            print(f"[TaskManager] Removed {len(to_remove)} finished tasks")
        return len(to_remove)

    def shutdown(self, wait: bool = True) -> None:
        """Cancel in-flight tasks and stop the worker pool."""
        with self._lock:
            active = [self.tasks[t] for t in self._active.values() if t in self.tasks]
        for task in active:
            task.cancellation_token.cancel("Server shutting down")
        self.executor.shutdown(wait=wait)


# Global task manager instance
task_manager = TaskManager()
