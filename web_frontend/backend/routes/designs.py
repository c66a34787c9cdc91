"""
Design API Routes.

CRUD for the current user's designs plus preview of a stored design.
"""

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from doe_studio import build_preview

from ..config import config
from ..services.design_store import design_store, template_store
from .deps import check_mode, require_user


router = APIRouter(prefix="/api", tags=["designs"])


class CreateDesignRequest(BaseModel):
    """Request schema for creating a design."""
    name: str = Field(..., min_length=1, max_length=255)
    mode: str = Field(..., description="DOE mode")
    parameters: Optional[Dict[str, Any]] = None


class UpdateDesignRequest(BaseModel):
    """Partial update; only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    mode: Optional[str] = None
    status: Optional[Literal["draft", "optimized"]] = None
    parameters: Optional[Dict[str, Any]] = None
    previewData: Optional[Dict[str, Any]] = None
    optimizationResult: Optional[Dict[str, Any]] = None


class FromTemplateRequest(BaseModel):
    templateId: int
    name: Optional[str] = Field(None, min_length=1, max_length=255)


def get_owned_design(design_id: int, user_id: str):
    design = design_store.get(design_id, user_id)
    if design is None:
        raise HTTPException(status_code=404, detail="Design not found")
    return design


@router.get("/designs")
async def list_designs(user_id: str = Depends(require_user)) -> List[Dict[str, Any]]:
    """All designs of the current user, most recently updated first."""
    return [d.to_dict() for d in design_store.list(user_id)]


@router.post("/designs", status_code=201)
async def create_design(
    request: CreateDesignRequest,
    user_id: str = Depends(require_user)
) -> Dict[str, Any]:
    check_mode(request.mode)
    design = design_store.create(user_id, request.name, request.mode, request.parameters)
    return design.to_dict()


@router.post("/designs/from-template", status_code=201)
async def create_design_from_template(
    request: FromTemplateRequest,
    user_id: str = Depends(require_user)
) -> Dict[str, Any]:
    """Copy a template into a new draft design."""
    template = template_store.get(request.templateId)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    design = design_store.create_from_template(user_id, template, request.name)
    return design.to_dict()


@router.get("/designs/{design_id}")
async def get_design(design_id: int, user_id: str = Depends(require_user)) -> Dict[str, Any]:
    return get_owned_design(design_id, user_id).to_dict()


@router.patch("/designs/{design_id}")
async def update_design(
    design_id: int,
    request: UpdateDesignRequest,
    user_id: str = Depends(require_user)
) -> Dict[str, Any]:
    updates = request.model_dump(exclude_unset=True)
    if updates.get('mode') is not None:
        check_mode(updates['mode'])
    design = design_store.update(design_id, user_id, updates)
    if design is None:
        raise HTTPException(status_code=404, detail="Design not found")
    return design.to_dict()


@router.delete("/designs/{design_id}")
async def delete_design(design_id: int, user_id: str = Depends(require_user)) -> Dict[str, Any]:
    if not design_store.delete(design_id, user_id):
        raise HTTPException(status_code=404, detail="Design not found")
    return {"success": True}


@router.post("/designs/{design_id}/preview")
async def preview_design(design_id: int, user_id: str = Depends(require_user)) -> Dict[str, Any]:
    """Recompute the preview of a stored design and store it alongside."""
    design = get_owned_design(design_id, user_id)
    try:
        preview = build_preview(design.params_dict(), config.pixel_ceiling)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    preview_dict = preview.to_dict()
    design_store.save(design_id, {'previewData': preview_dict})
    return preview_dict
