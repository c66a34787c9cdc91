"""
Advisory warning rules for the preview summary.

Every rule is evaluated independently against the resolved values and the
messages of those that trigger are returned in the fixed order below.
Warnings never block preview generation.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..api.errors import WarningCode


LARGE_ANGLE_THRESHOLD_DEG = 45.0
TIGHT_TOLERANCE_PERCENT = 0.5
LARGE_SPOT_COUNT = 10000


@dataclass(frozen=True)
class RuleInput:
    """Resolved values the warning rules are evaluated against.

    Attributes:
        full_angle_deg: Resolved full diffraction angle in degrees
        tolerance_percent: User tolerance (%), None for modes without one
        total_spots: Total number of target elements
    """
    full_angle_deg: float
    tolerance_percent: Optional[float]
    total_spots: int


@dataclass(frozen=True)
class WarningRule:
    code: WarningCode
    message: str
    applies: Callable[[RuleInput], bool]


WARNING_RULES: Tuple[WarningRule, ...] = (
    WarningRule(
        WarningCode.LARGE_ANGLE,
        "Large diffraction angle (>45°) may result in reduced efficiency and increased aberrations.",
        lambda v: v.full_angle_deg > LARGE_ANGLE_THRESHOLD_DEG,
    ),
    WarningRule(
        WarningCode.TOLERANCE_TIGHT,
        "Very tight tolerance (<0.5%) may require significantly longer optimization time.",
        lambda v: v.tolerance_percent is not None and v.tolerance_percent < TIGHT_TOLERANCE_PERCENT,
    ),
    WarningRule(
        WarningCode.LARGE_COMPUTATION,
        "Large array size may require extended computation time for optimization.",
        lambda v: v.total_spots > LARGE_SPOT_COUNT,
    ),
)


def triggered_rules(values: RuleInput) -> List[WarningRule]:
    """Rules that trigger for the given values, in rule order."""
    return [rule for rule in WARNING_RULES if rule.applies(values)]


def evaluate_warnings(values: RuleInput) -> List[str]:
    """Warning strings for the given values, in rule order."""
    return [rule.message for rule in triggered_rules(values)]
