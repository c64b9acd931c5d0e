"""Environmental impact scoring for a garment's fiber composition."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable, Mapping, Sequence

from wearaware.impact.fibers import (
    FiberImpactProfile,
    is_known,
    lookup,
    normalize_fiber_name,
)

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50
NEUTRAL_GRADE = "C"
PERCENTAGE_TOLERANCE = 0.1

# Highest threshold first; the first matching row wins.
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (80, "A"),
    (65, "B"),
    (50, "C"),
    (35, "D"),
)
LOWEST_GRADE = "F"

SUGGESTION_THRESHOLD = 70
ALTERNATIVES: Mapping[str, tuple[str, ...]] = {
    "cotton": ("Organic Cotton",),
    "polyester": ("Recycled Polyester", "Hemp", "Linen"),
    "nylon": ("Recycled Nylon",),
    "acrylic": ("Wool", "Hemp"),
    "spandex": ("Recycled Elastane",),
    "elastane": ("Recycled Elastane",),
    "rayon": ("Lyocell", "Modal"),
    "viscose": ("Lyocell", "Modal"),
    "bamboo": ("Lyocell",),
    "ramie": ("Linen", "Hemp"),
    "wool": ("Recycled Wool",),
    "silk": ("Peace Silk",),
}
BLEND_ALTERNATIVES: Mapping[str, tuple[str, ...]] = {
    "polyester": ("Hemp", "Linen"),
}


@dataclass(frozen=True, slots=True)
class FiberEntry:
    """One component of a garment's composition."""

    name: str
    percentage: float = 0.0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "FiberEntry":
        """Build an entry from loosely typed input; bad percentages count as zero."""

        return cls(
            name=str(raw.get("name") or ""),
            percentage=_coerce_percentage(raw.get("percentage")),
        )


@dataclass(frozen=True, slots=True)
class ImpactResult:
    """Aggregate footprint of one garment."""

    score: int
    grade: str
    water_usage_liters: float
    carbon_footprint_kg: float


@dataclass(frozen=True, slots=True)
class FiberContribution:
    """Share of the garment footprint caused by a single fiber."""

    fiber_name: str
    percentage: float
    water_liters: float
    carbon_kg: float
    profile: FiberImpactProfile


def _coerce_percentage(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _round_half_up(value: float, places: int) -> float:
    if not math.isfinite(value):
        return value
    number = Decimal(repr(value))
    with localcontext() as context:
        # quantize needs room for every integer digit plus the kept decimals
        context.prec = max(context.prec, number.adjusted() + places + 2)
        return float(number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def composition_from_raw(items: Iterable[Mapping[str, Any]] | None) -> list[FiberEntry]:
    """Convert stored or posted ``{name, percentage}`` pairs into entries."""

    if not items:
        return []
    return [FiberEntry.from_raw(item) for item in items]


def score_to_grade(score: float) -> str:
    """Map a 0-100 score to its letter grade."""

    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return LOWEST_GRADE


def calculate_impact(fibers: Sequence[FiberEntry], weight_grams: float) -> ImpactResult:
    """
    Compute score, grade, water and carbon for a composition.

    When the percentages do not add up to 100 only the score is rescaled; the
    water and carbon totals stay proportional to the literal percentages since
    they describe physical mass.
    """

    if not fibers:
        return ImpactResult(
            score=NEUTRAL_SCORE,
            grade=NEUTRAL_GRADE,
            water_usage_liters=0.0,
            carbon_footprint_kg=0.0,
        )

    weight_kg = weight_grams / 1000
    total_water = 0.0
    total_carbon = 0.0
    weighted_score = 0.0
    total_percentage = 0.0

    for fiber in fibers:
        profile = lookup(fiber.name)
        fraction = fiber.percentage / 100
        total_water += profile.water_per_kg * weight_kg * fraction
        total_carbon += profile.co2_per_kg * weight_kg * fraction
        weighted_score += profile.base_score * fraction
        total_percentage += fiber.percentage

    if total_percentage > 0 and abs(total_percentage - 100) > PERCENTAGE_TOLERANCE:
        logger.warning(
            "Fiber percentages sum to %.2f instead of 100; normalising score",
            total_percentage,
        )
        weighted_score = weighted_score * (100 / total_percentage)

    if not math.isfinite(weighted_score):
        logger.warning("Fiber percentages overflow the score; using the neutral score")
        weighted_score = NEUTRAL_SCORE

    score = int(_round_half_up(weighted_score, 0))
    return ImpactResult(
        score=score,
        grade=score_to_grade(score),
        water_usage_liters=_round_half_up(total_water, 2),
        carbon_footprint_kg=_round_half_up(total_carbon, 2),
    )


def get_fiber_contribution(
    fiber_name: str,
    percentage: float,
    weight_grams: float,
) -> FiberContribution:
    """Return the unrounded water and carbon attributable to one fiber."""

    profile = lookup(fiber_name)
    weight_kg = weight_grams / 1000
    fraction = percentage / 100
    return FiberContribution(
        fiber_name=fiber_name,
        percentage=percentage,
        water_liters=profile.water_per_kg * weight_kg * fraction,
        carbon_kg=profile.co2_per_kg * weight_kg * fraction,
        profile=profile,
    )


def breakdown(fibers: Sequence[FiberEntry], weight_grams: float) -> list[FiberContribution]:
    """Contribution of every entry, in composition order."""

    return [
        get_fiber_contribution(fiber.name, fiber.percentage, weight_grams)
        for fiber in fibers
    ]


def suggest_alternatives(fibers: Iterable[FiberEntry]) -> list[str]:
    """Return deduplicated substitutes for the low-scoring fibers of a garment."""

    suggestions: list[str] = []
    for fiber in fibers:
        key = normalize_fiber_name(fiber.name)
        if is_known(key):
            if lookup(key).base_score >= SUGGESTION_THRESHOLD:
                continue
            candidates = ALTERNATIVES.get(key, ())
        else:
            candidates = next(
                (alts for marker, alts in BLEND_ALTERNATIVES.items() if marker in key),
                (),
            )
        for candidate in candidates:
            if candidate not in suggestions:
                suggestions.append(candidate)
    return suggestions
