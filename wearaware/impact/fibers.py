"""Per-kilogram environmental coefficients for recognised textile fibers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class FiberFamily(str, Enum):
    """Broad origin of a fiber."""

    NATURAL_CELLULOSIC = "natural_cellulosic"
    ANIMAL = "animal"
    SYNTHETIC = "synthetic"
    REGENERATED_CELLULOSIC = "regenerated_cellulosic"


@dataclass(frozen=True, slots=True)
class FiberImpactProfile:
    """Impact of producing one kilogram of a fiber."""

    name: str
    family: FiberFamily
    water_per_kg: float
    co2_per_kg: float
    base_score: int
    biodegradable: bool = True
    decomposition_estimate: str | None = None


def _profile(
    name: str,
    family: FiberFamily,
    water: float,
    co2: float,
    score: int,
    *,
    biodegradable: bool = True,
    decomposes_in: str | None = None,
) -> FiberImpactProfile:
    return FiberImpactProfile(
        name=name,
        family=family,
        water_per_kg=water,
        co2_per_kg=co2,
        base_score=score,
        biodegradable=biodegradable,
        decomposition_estimate=decomposes_in,
    )


_NATURAL = FiberFamily.NATURAL_CELLULOSIC
_ANIMAL = FiberFamily.ANIMAL
_SYNTHETIC = FiberFamily.SYNTHETIC
_REGENERATED = FiberFamily.REGENERATED_CELLULOSIC

_PROFILES: tuple[FiberImpactProfile, ...] = (
    _profile("Cotton", _NATURAL, 10000, 1.55, 60, decomposes_in="1-5 months"),
    _profile("Organic Cotton", _NATURAL, 5000, 1.0, 80, decomposes_in="1-5 months"),
    _profile("Flax", _NATURAL, 2500, 0.66, 85),
    _profile("Linen", _NATURAL, 2500, 0.66, 85, decomposes_in="2 weeks"),
    _profile("Jute", _NATURAL, 2000, 0.67, 82),
    _profile("Hemp", _NATURAL, 2500, 0.70, 84, decomposes_in="2-8 weeks"),
    _profile("Ramie", _NATURAL, 2800, 1.77, 68),
    _profile("Kenaf", _NATURAL, 2200, 0.60, 83),
    _profile("Sisal", _NATURAL, 1800, 0.27, 88),
    _profile("Bamboo", _NATURAL, 3000, 3.90, 55),
    _profile("Pineapple Leaf", _NATURAL, 2000, 0.78, 82),
    _profile("Banana Leaf", _NATURAL, 1500, 0.40, 86),
    _profile("Corn Husk", _NATURAL, 1800, 0.74, 83),
    _profile("Soy Protein", _NATURAL, 1600, 0.35, 87),
    _profile("Nettle", _NATURAL, 1900, 0.40, 86),
    _profile("Bhimal", _NATURAL, 2100, 0.82, 81),
    _profile("Sugarcane Bagasse", _NATURAL, 1700, 0.68, 84),
    _profile("Wool", _ANIMAL, 125000, 10.4, 45, decomposes_in="1-5 years"),
    _profile("Silk", _ANIMAL, 3400, 4.5, 50, decomposes_in="1-4 years"),
    _profile(
        "Polyester", _SYNTHETIC, 45, 9.52, 30,
        biodegradable=False, decomposes_in="200+ years",
    ),
    _profile(
        "Nylon", _SYNTHETIC, 250, 7.6, 35,
        biodegradable=False, decomposes_in="30-40 years",
    ),
    _profile("Acrylic", _SYNTHETIC, 132, 8.5, 25, biodegradable=False),
    _profile("Spandex", _SYNTHETIC, 120, 9.0, 20, biodegradable=False),
    _profile("Elastane", _SYNTHETIC, 120, 9.0, 20, biodegradable=False),
    _profile("Rayon", _REGENERATED, 400, 1.2, 58, decomposes_in="5 weeks - 5 months"),
    _profile("Viscose", _REGENERATED, 400, 1.2, 58),
    _profile("Modal", _REGENERATED, 350, 0.03, 75),
    _profile("Lyocell", _REGENERATED, 200, 0.05, 80, decomposes_in="4-6 weeks"),
    _profile("Tencel", _REGENERATED, 200, 0.05, 80, decomposes_in="4-6 weeks"),
)


def normalize_fiber_name(name: str | None) -> str:
    """Return the comparison key for a fiber name."""

    if not name:
        return ""
    return " ".join(str(name).split()).lower()


FIBER_PROFILES: Mapping[str, FiberImpactProfile] = MappingProxyType(
    {normalize_fiber_name(profile.name): profile for profile in _PROFILES}
)

FALLBACK_FIBER = "Cotton"
FALLBACK_PROFILE = FIBER_PROFILES[normalize_fiber_name(FALLBACK_FIBER)]


def lookup(name: str | None) -> FiberImpactProfile:
    """
    Return the profile for ``name``.

    Matching is case-insensitive. Unrecognised names resolve to the cotton
    profile instead of raising, so callers can feed raw label text through.
    """

    return FIBER_PROFILES.get(normalize_fiber_name(name), FALLBACK_PROFILE)


def is_known(name: str | None) -> bool:
    """Return ``True`` if ``name`` matches a row of the reference table."""

    return normalize_fiber_name(name) in FIBER_PROFILES


def available_fibers() -> list[str]:
    """Canonical fiber names in alphabetical order."""

    return sorted(profile.name for profile in FIBER_PROFILES.values())
