"""
Template API Routes.

Public read access to active templates; writes require the admin role.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..services.design_store import template_store
from .deps import check_mode, require_admin


router = APIRouter(prefix="/api", tags=["templates"])


class CreateTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    mode: str
    parameters: Dict[str, Any]
    description: Optional[str] = None
    category: Optional[str] = None
    thumbnailUrl: Optional[str] = None
    displayOrder: int = 0


class UpdateTemplateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    mode: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    description: Optional[str] = None
    category: Optional[str] = None
    thumbnailUrl: Optional[str] = None
    isActive: Optional[bool] = None
    displayOrder: Optional[int] = None


@router.get("/templates")
async def list_templates() -> List[Dict[str, Any]]:
    """Active templates by display order."""
    return [t.to_dict() for t in template_store.list_active()]


@router.get("/templates/{template_id}")
async def get_template(template_id: int) -> Dict[str, Any]:
    template = template_store.get(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template.to_dict()


@router.post("/templates", status_code=201)
async def create_template(
    request: CreateTemplateRequest,
    user_id: str = Depends(require_admin)
) -> Dict[str, Any]:
    check_mode(request.mode)
    template = template_store.create(
        name=request.name,
        mode=request.mode,
        parameters=request.parameters,
        description=request.description,
        category=request.category,
        thumbnail_url=request.thumbnailUrl,
        display_order=request.displayOrder,
    )
    return template.to_dict()


@router.patch("/templates/{template_id}")
async def update_template(
    template_id: int,
    request: UpdateTemplateRequest,
    user_id: str = Depends(require_admin)
) -> Dict[str, Any]:
    updates = request.model_dump(exclude_unset=True)
    if updates.get('mode') is not None:
        check_mode(updates['mode'])
    template = template_store.update(template_id, updates)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template.to_dict()


@router.delete("/templates/{template_id}")
async def delete_template(template_id: int, user_id: str = Depends(require_admin)) -> Dict[str, Any]:
    if not template_store.delete(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return {"success": True}
