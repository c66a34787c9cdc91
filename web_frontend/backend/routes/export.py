"""
Export API Routes.

Handles exporting a design's optimization result in various formats.
"""

import io
import base64
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from typing import Optional, Literal
import numpy as np

from doe_studio import OptimizationResultData

from .deps import require_user
from .designs import get_owned_design


router = APIRouter(prefix="/api", tags=["export"])


class ExportRequest(BaseModel):
    """Request schema for export."""
    format: Literal["csv", "npy", "json"] = Field("csv", description="Export format")
    data_type: Literal["phase", "target", "actual"] = Field("phase", description="Data to export")


class ExportResponse(BaseModel):
    """Response for export request."""
    success: bool
    filename: Optional[str] = None
    content_type: Optional[str] = None
    data: Optional[str] = None  # Base64 encoded for binary formats
    error: Optional[str] = None


FILENAMES = {
    'phase': 'doe_phase_map',
    'target': 'doe_target_intensity',
    'actual': 'doe_actual_intensity',
}


@router.post("/designs/{design_id}/export")
async def export_result(design_id: int, request: ExportRequest, user_id: str = Depends(require_user)):
    """Export optimization result data.

    Supports:
    - CSV: Comma-separated values (text)
    - NPY: NumPy binary format (base64 encoded)
    - JSON: JSON format

    Data types:
    - phase: Phase map (0-255)
    - target: Target intensity
    - actual: Simulated intensity
    """
    design = get_owned_design(design_id, user_id)

    if not design.optimization_result:
        raise HTTPException(status_code=400, detail="No optimization result available")

    try:
        result = OptimizationResultData.from_dict(design.optimization_result)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Stored result is incomplete: {e}")

    arr = result.get_array(request.data_type)
    filename_base = FILENAMES[request.data_type]

    if request.format == 'csv':
        output = io.StringIO()
        fmt = '%d' if request.data_type == 'phase' else '%.8e'
        np.savetxt(output, arr, delimiter=',', fmt=fmt)
        content = output.getvalue()

        return StreamingResponse(
            io.BytesIO(content.encode()),
            media_type='text/csv',
            headers={
                'Content-Disposition': f'attachment; filename="{filename_base}.csv"'
            }
        )

    elif request.format == 'npy':
        # Export as NPY (base64 encoded)
        output = io.BytesIO()
        np.save(output, arr)
        output.seek(0)
        data_base64 = base64.b64encode(output.read()).decode('utf-8')

        return ExportResponse(
            success=True,
            filename=f"{filename_base}.npy",
            content_type="application/octet-stream",
            data=data_base64
        )

    else:  # json
        return {
            'success': True,
            'filename': f"{filename_base}.json",
            'shape': list(arr.shape),
            'data': arr.tolist()
        }
