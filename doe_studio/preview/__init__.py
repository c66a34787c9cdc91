"""Preview summary builder, warning rules and parameter-panel hints."""

from .resolved import ResolvedParams, resolve_params
from .rules import WARNING_RULES, RuleInput, evaluate_warnings, triggered_rules
from .summary import build_preview, build_summary, estimate_computation_time
from .hints import ParameterHints, parameter_hints

__all__ = [
    "ResolvedParams",
    "resolve_params",
    "WARNING_RULES",
    "RuleInput",
    "evaluate_warnings",
    "triggered_rules",
    "build_preview",
    "build_summary",
    "estimate_computation_time",
    "ParameterHints",
    "parameter_hints",
]
