"""Structured validation messages and the parameter validator."""

from .messages import Severity, ValidationMessage, ValidationResult
from .validator import validate_params

__all__ = [
    "Severity",
    "ValidationMessage",
    "ValidationResult",
    "validate_params",
]
