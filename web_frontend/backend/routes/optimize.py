"""
Optimization API Routes.

Starts, polls and cancels background optimization tasks. At most one
task runs per design; a second request while one is in flight gets 409.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ..services.design_store import design_store
from ..services.task_manager import task_manager
from .deps import require_user
from .designs import get_owned_design


router = APIRouter(prefix="/api", tags=["optimize"])


def _get_owned_task(task_id: str, user_id: str):
    task = task_manager.get_task(task_id)
    if task is None or design_store.get(task.design_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/designs/{design_id}/optimize", status_code=202)
async def start_optimization(design_id: int, user_id: str = Depends(require_user)):
    """Start optimizing a stored design.

    Returns the task id to poll. The design's previous optimization
    result stays visible until the new one is complete.
    """
    design = get_owned_design(design_id, user_id)
    # OptimizationInProgressError is mapped to 409 by the app
    try:
        task = task_manager.submit(design)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"task_id": task.task_id, "status": task.status.value}


@router.get("/tasks/{task_id}")
async def get_task_status(task_id: str, user_id: str = Depends(require_user)) -> Dict[str, Any]:
    """Status, progress and error of an optimization task."""
    return _get_owned_task(task_id, user_id).to_dict()


@router.post("/tasks/{task_id}/cancel")
async def cancel_task(task_id: str, user_id: str = Depends(require_user)) -> Dict[str, Any]:
    """Request cancellation; the last good result of the design is kept."""
    _get_owned_task(task_id, user_id)
    task_manager.cancel_task(task_id)
    return {"success": True, "message": "Cancellation requested"}
