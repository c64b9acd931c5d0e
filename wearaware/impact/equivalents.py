"""Everyday comparisons for garment footprints."""

from __future__ import annotations

from dataclasses import dataclass

from wearaware.impact.calculator import ImpactResult

LITERS_PER_CUP_OF_TEA = 8
KM_DRIVEN_PER_KG_CO2 = 4.5
HOUSEHOLD_LITERS_PER_DAY = 320


@dataclass(frozen=True, slots=True)
class ImpactEquivalents:
    """Water and carbon totals restated at a human scale."""

    cups_of_tea: int
    driving_km: float
    household_water_share_pct: float


def describe_equivalents(result: ImpactResult) -> ImpactEquivalents:
    water = result.water_usage_liters
    return ImpactEquivalents(
        cups_of_tea=round(water / LITERS_PER_CUP_OF_TEA),
        driving_km=round(result.carbon_footprint_kg * KM_DRIVEN_PER_KG_CO2, 1),
        household_water_share_pct=round(water / HOUSEHOLD_LITERS_PER_DAY * 100, 1),
    )
