"""
Validation API Routes.

Handles parameter validation with structured error messages.
"""

from typing import Any, Dict

from fastapi import APIRouter

from doe_studio import validate_params

from ..config import config
from .preview import ParametersRequest


router = APIRouter(prefix="/api", tags=["validation"])


@router.post("/validate")
async def validate_user_input(request: ParametersRequest) -> Dict[str, Any]:
    """Validate user input parameters.

    Returns errors that prevent optimization, warnings for potential
    issues and infos for automatic corrections.
    """
    result = validate_params(request.parameters, config.pixel_ceiling)
    return result.to_dict()
