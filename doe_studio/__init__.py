"""
DOE Studio - parameter-to-preview engine for Diffractive Optical Elements

This package turns user-entered DOE parameters (wavelength, working
distance, aperture, target specification) into preview summaries and
warnings, and runs optimizations through a pluggable optimizer.

## Architecture

The package is organized into layers:
- core/: Unit conversion, optical geometry, tolerance & resolution limits
- params/: Mode-polymorphic parameter records and the load boundary
- validation/: Parameter validation with structured messages
- preview/: Preview summary builder, warning rules, parameter hints
- patterns/: Custom pattern image preprocessing
- optimizer/: Optimizer capability and the mock implementation
- pipeline/: Progress reporting and cancellation
- api/: Error codes, exceptions and serializable result types

## Main Entry Points

    from doe_studio import load_params, build_preview
    preview = build_preview(load_params(stored_json))
    print(preview.to_dict())
"""

__version__ = "1.0.0"

# =============================================================================
# API Layer
# =============================================================================
from .api.errors import (
    ErrorCode,
    WarningCode,
    OptimizationError,
    OptimizationCancelled,
    OptimizationTimeout,
    OptimizationInProgressError,
)
from .api.response import PreviewSummary, PreviewData, EfficiencyData, OptimizationResultData

# =============================================================================
# Core Layer
# =============================================================================
from .core.units import (
    Quantity,
    parse_quantity,
    convert_to_mm,
    convert_to_nm,
    convert_to_degrees,
    is_infinite_distance,
)
from .core.geometry import (
    equivalent_full_angle,
    reference_depth_of_focus,
    max_diffraction_half_angle,
)
from .core.tolerance import PIXEL_CEILING, ToleranceLimits, calculate_min_tolerance

# =============================================================================
# Params Layer
# =============================================================================
from .params.base import DOEMode, TargetType, DOEParams, FIELD_DEFAULTS
from .params.loader import load_params, to_dict as params_to_dict

# =============================================================================
# Validation Layer
# =============================================================================
from .validation.validator import validate_params
from .validation.messages import ValidationResult, ValidationMessage

# =============================================================================
# Preview Layer
# =============================================================================
from .preview.summary import build_preview
from .preview.hints import ParameterHints, parameter_hints

# =============================================================================
# Optimizer / Pipeline Layer
# =============================================================================
from .optimizer import Optimizer, MockOptimizer, create_optimizer
from .pipeline.progress import ProgressInfo, CancellationToken

# =============================================================================
# Patterns
# =============================================================================
from .patterns.custom import process_pattern, ProcessedPattern


__all__ = [
    # Version
    "__version__",

    # API
    "ErrorCode",
    "WarningCode",
    "OptimizationError",
    "OptimizationCancelled",
    "OptimizationTimeout",
    "OptimizationInProgressError",
    "PreviewSummary",
    "PreviewData",
    "EfficiencyData",
    "OptimizationResultData",

    # Core
    "Quantity",
    "parse_quantity",
    "convert_to_mm",
    "convert_to_nm",
    "convert_to_degrees",
    "is_infinite_distance",
    "equivalent_full_angle",
    "reference_depth_of_focus",
    "max_diffraction_half_angle",
    "PIXEL_CEILING",
    "ToleranceLimits",
    "calculate_min_tolerance",

    # Params
    "DOEMode",
    "TargetType",
    "DOEParams",
    "FIELD_DEFAULTS",
    "load_params",
    "params_to_dict",

    # Validation
    "validate_params",
    "ValidationResult",
    "ValidationMessage",

    # Preview
    "build_preview",
    "ParameterHints",
    "parameter_hints",

    # Optimizer / Pipeline
    "Optimizer",
    "MockOptimizer",
    "create_optimizer",
    "ProgressInfo",
    "CancellationToken",

    # Patterns
    "process_pattern",
    "ProcessedPattern",
]
