"""Tests for the impact calculator."""

from __future__ import annotations

import logging
import math

import pytest

from wearaware.impact.calculator import (
    FiberEntry,
    ImpactResult,
    breakdown,
    calculate_impact,
    composition_from_raw,
    get_fiber_contribution,
    score_to_grade,
    suggest_alternatives,
)
from wearaware.impact.fibers import lookup


@pytest.mark.parametrize("weight", [0, 300, 1000])
def test_empty_composition_is_neutral(weight: int) -> None:
    assert calculate_impact([], weight) == ImpactResult(
        score=50,
        grade="C",
        water_usage_liters=0,
        carbon_footprint_kg=0,
    )


def test_pure_cotton_kilogram() -> None:
    result = calculate_impact([FiberEntry("Cotton", 100)], 1000)

    assert result == ImpactResult(score=60, grade="C", water_usage_liters=10000.0, carbon_footprint_kg=1.55)


def test_pure_polyester_half_kilogram() -> None:
    result = calculate_impact([FiberEntry("Polyester", 100)], 500)

    assert result.water_usage_liters == 22.5
    assert result.carbon_footprint_kg == 4.76
    assert result.score == 30
    assert result.grade == "F"


def test_cotton_polyester_blend() -> None:
    fibers = [FiberEntry("Cotton", 60), FiberEntry("Polyester", 40)]

    result = calculate_impact(fibers, 300)

    assert result.water_usage_liters == 1805.4
    assert result.carbon_footprint_kg == 1.42
    assert result.score == 48
    assert result.grade == "D"


def test_identical_inputs_give_identical_results() -> None:
    fibers = [FiberEntry("Wool", 70), FiberEntry("Nylon", 25), FiberEntry("Elastane", 5)]

    assert calculate_impact(fibers, 400) == calculate_impact(list(fibers), 400)


@pytest.mark.parametrize(
    ("score", "grade"),
    [
        (100, "A"),
        (80, "A"),
        (79, "B"),
        (65, "B"),
        (64, "C"),
        (50, "C"),
        (49, "D"),
        (35, "D"),
        (34, "F"),
        (0, "F"),
    ],
)
def test_grade_boundaries(score: int, grade: str) -> None:
    assert score_to_grade(score) == grade


def test_partial_composition_rescales_score_but_not_totals() -> None:
    # Design decision: the score describes composition quality and is
    # normalised to 100 %, water and carbon follow the literal mass fraction.
    half = calculate_impact([FiberEntry("Cotton", 50)], 1000)
    full = calculate_impact([FiberEntry("Cotton", 100)], 1000)

    assert half.score == full.score == 60
    assert half.grade == "C"
    assert half.water_usage_liters == full.water_usage_liters / 2
    assert half.carbon_footprint_kg == 0.78


def test_normalisation_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="wearaware.impact.calculator"):
        calculate_impact([FiberEntry("Linen", 50)], 300)

    assert "normalising score" in caplog.text


def test_small_rounding_drift_is_tolerated(caplog: pytest.LogCaptureFixture) -> None:
    fibers = [FiberEntry("Cotton", 33.33), FiberEntry("Hemp", 33.33), FiberEntry("Silk", 33.33)]

    with caplog.at_level(logging.WARNING, logger="wearaware.impact.calculator"):
        result = calculate_impact(fibers, 200)

    assert caplog.text == ""
    assert result.score == 65


def test_unknown_fiber_scored_as_cotton() -> None:
    unknown = calculate_impact([FiberEntry("Mystery Fleece", 100)], 250)

    assert unknown == calculate_impact([FiberEntry("Cotton", 100)], 250)


def test_name_matching_ignores_case() -> None:
    assert calculate_impact([FiberEntry("hEMp", 100)], 300) == calculate_impact(
        [FiberEntry("Hemp", 100)], 300
    )


def test_missing_and_non_numeric_percentages_count_as_zero() -> None:
    fibers = composition_from_raw(
        [
            {"name": "Cotton"},
            {"name": "Polyester", "percentage": "abc"},
            {"name": "Linen", "percentage": "50"},
            {"name": "Wool", "percentage": None},
        ]
    )

    result = calculate_impact(fibers, 1000)

    assert [fiber.percentage for fiber in fibers] == [0.0, 0.0, 50.0, 0.0]
    assert result.score == 85
    assert result.grade == "A"
    assert result.water_usage_liters == 1250.0


def test_out_of_range_percentages_are_not_clamped() -> None:
    result = calculate_impact([FiberEntry("Cotton", 150), FiberEntry("Polyester", -50)], 1000)

    assert result.score == 75
    assert result.grade == "B"
    assert result.water_usage_liters == 14977.5
    assert result.carbon_footprint_kg < 0


@pytest.mark.parametrize(
    ("percentage", "weight", "water"),
    [
        (1e26, 300, 3e27),
        (100, 1e30, 1e31),
        (1e308, 300, math.inf),
    ],
)
def test_huge_inputs_still_produce_a_result(percentage: float, weight: float, water: float) -> None:
    result = calculate_impact([FiberEntry("Cotton", percentage)], weight)

    assert isinstance(result, ImpactResult)
    assert isinstance(result.score, int)
    assert result.score == 60
    assert result.grade == "C"
    assert result.water_usage_liters == pytest.approx(water)
    assert math.isfinite(result.carbon_footprint_kg)


def test_fiber_contribution_is_unrounded() -> None:
    contribution = get_fiber_contribution("Wool", 50, 400)

    assert contribution.profile == lookup("Wool")
    assert contribution.water_liters == pytest.approx(25000.0)
    assert contribution.carbon_kg == pytest.approx(2.08)


def test_breakdown_keeps_composition_order() -> None:
    fibers = [FiberEntry("Polyester", 40), FiberEntry("Cotton", 60)]

    contributions = breakdown(fibers, 300)

    assert [item.fiber_name for item in contributions] == ["Polyester", "Cotton"]
    assert sum(item.water_liters for item in contributions) == pytest.approx(1805.4)


def test_suggest_alternatives_deduplicates() -> None:
    fibers = [FiberEntry("Cotton", 50), FiberEntry("polyester", 30), FiberEntry("Cotton", 20)]

    assert suggest_alternatives(fibers) == [
        "Organic Cotton",
        "Recycled Polyester",
        "Hemp",
        "Linen",
    ]


def test_sustainable_fibers_need_no_alternatives() -> None:
    assert suggest_alternatives([FiberEntry("Linen", 70), FiberEntry("Tencel", 30)]) == []


def test_polyester_blends_suggest_natural_fibers() -> None:
    assert suggest_alternatives([FiberEntry("Recycled Polyester", 100)]) == ["Hemp", "Linen"]
    assert suggest_alternatives([FiberEntry("Unobtainium", 100)]) == []
