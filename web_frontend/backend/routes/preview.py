"""
Preview API Routes.

Handles preview summaries, parameter-panel hints and form presets.
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from doe_studio import build_preview, load_params, parameter_hints
from doe_studio.params.presets import all_presets

from ..config import config


router = APIRouter(prefix="/api", tags=["preview"])


class ParametersRequest(BaseModel):
    """Request schema carrying a camelCase parameter blob."""
    parameters: Dict[str, Any] = Field(default_factory=dict, description="DOE parameters")


@router.post("/preview")
async def preview_parameters(request: ParametersRequest) -> Dict[str, Any]:
    """Compute the preview summary and warnings for a parameter set.

    Never fails for bad field values: unparseable fields are defaulted
    and listed in ``invalidFields``.
    """
    try:
        preview = build_preview(request.parameters, config.pixel_ceiling)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return preview.to_dict()


@router.post("/hints")
async def get_parameter_hints(request: ParametersRequest) -> Dict[str, Any]:
    """Live hints shown next to the parameter fields."""
    try:
        params = load_params(request.parameters)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return parameter_hints(params, config.pixel_ceiling).to_dict()


@router.get("/presets")
async def get_presets() -> Dict[str, Any]:
    """Distance, wavelength, diameter and fabrication recipe presets."""
    return all_presets()
