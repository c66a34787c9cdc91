"""
Pattern API Routes.

Preprocesses an uploaded custom pattern image (or a preset) and returns
the grayscale preview and its summary for the custom-pattern form.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from doe_studio import process_pattern
from doe_studio.params.base import PatternPreset, ResizeMode


router = APIRouter(prefix="/api", tags=["patterns"])


class PatternRequest(BaseModel):
    """Request schema for pattern preprocessing."""
    image_data: Optional[str] = Field(None, description="Base64 image or data URL")
    preset: PatternPreset = PatternPreset.NONE
    resize_mode: ResizeMode = ResizeMode.PERCENTAGE
    resize_percentage: Optional[float] = Field(None, gt=0)
    resize_width: Optional[int] = Field(None, gt=0)
    resize_height: Optional[int] = Field(None, gt=0)


@router.post("/patterns/preview")
async def preview_pattern(request: PatternRequest) -> Dict[str, Any]:
    """Resize, pad to square and convert the pattern to grayscale.

    The returned ``customPatternPreview`` and ``customPatternInfo`` are
    stored in the design parameters as-is.
    """
    try:
        processed = process_pattern(
            image_data=request.image_data,
            preset=request.preset,
            resize_mode=request.resize_mode,
            percentage=request.resize_percentage,
            target_width=request.resize_width,
            target_height=request.resize_height,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        'customPatternPreview': processed.preview,
        'customPatternInfo': processed.info_dict(),
    }
