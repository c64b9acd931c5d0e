"""Fiber reference data and the impact calculator."""

from .calculator import (
    FiberContribution,
    FiberEntry,
    ImpactResult,
    breakdown,
    calculate_impact,
    composition_from_raw,
    get_fiber_contribution,
    score_to_grade,
    suggest_alternatives,
)
from .fibers import (
    FiberFamily,
    FiberImpactProfile,
    available_fibers,
    is_known,
    lookup,
)

__all__ = [
    "FiberContribution",
    "FiberEntry",
    "FiberFamily",
    "FiberImpactProfile",
    "ImpactResult",
    "available_fibers",
    "breakdown",
    "calculate_impact",
    "composition_from_raw",
    "get_fiber_contribution",
    "is_known",
    "lookup",
    "score_to_grade",
    "suggest_alternatives",
]
