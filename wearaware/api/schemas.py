"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wearaware.catalog.item_types import ItemType
from wearaware.impact.calculator import FiberContribution, ImpactResult, score_to_grade
from wearaware.impact.equivalents import ImpactEquivalents
from wearaware.impact.fibers import FiberImpactProfile


class CamelModel(BaseModel):
    """Accepts both the client's camelCase keys and snake_case names."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class FiberIn(BaseModel):
    name: str
    percentage: float | None = None


class ScanCreate(CamelModel):
    firebase_uid: str | None = Field(default=None, alias="firebaseUid")
    brand: str | None = None
    item_type: str | None = Field(default=None, alias="itemType")
    fibers: list[FiberIn] = Field(default_factory=list)
    raw_text: str | None = Field(default=None, alias="rawText")
    scan_type: str | None = Field(default=None, alias="scanType")


class ScanUpdate(CamelModel):
    firebase_uid: str | None = Field(default=None, alias="firebaseUid")
    brand: str | None = None
    item_type: str | None = Field(default=None, alias="itemType")
    fibers: list[FiberIn] = Field(default_factory=list)


class ScanOut(CamelModel):
    """Stored scan in camelCase, except the two persisted totals which keep their column names."""

    id: int
    brand: str | None = None
    item_type: str | None = Field(default=None, serialization_alias="itemType")
    fibers: list[FiberIn]
    grade: str
    score: int
    water_usage_liters: float
    carbon_footprint_kg: float
    item_weight_grams: int = Field(serialization_alias="itemWeightGrams")
    scan_type: str = Field(serialization_alias="scanType")
    raw_text: str | None = Field(default=None, serialization_alias="rawText")
    created_at: datetime = Field(serialization_alias="createdAt")


class ScanEnvelope(CamelModel):
    success: bool = True
    scan: ScanOut
    scan_id: int | None = Field(default=None, serialization_alias="scanId")


class ScanHistory(BaseModel):
    success: bool = True
    scans: list[ScanOut]


class Acknowledgement(BaseModel):
    success: bool = True
    message: str


class UserSync(CamelModel):
    firebase_uid: str | None = Field(default=None, alias="firebaseUid")
    email: str | None = None


class UserOut(CamelModel):
    id: int
    firebase_uid: str
    email: str
    created_at: datetime


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserOut
    message: str | None = None


class ItemTypeOut(BaseModel):
    name: str
    estimated_weight_grams: int
    category: str

    @classmethod
    def from_item_type(cls, item: ItemType) -> "ItemTypeOut":
        return cls(
            name=item.name,
            estimated_weight_grams=item.weight_grams,
            category=item.category,
        )


class ItemTypeList(CamelModel):
    success: bool = True
    item_types: list[ItemTypeOut] = Field(serialization_alias="itemTypes")


class ItemTypeEnvelope(CamelModel):
    success: bool = True
    item_type: ItemTypeOut = Field(serialization_alias="itemType")


class FiberProfileOut(BaseModel):
    name: str
    family: str
    water_per_kg: float
    co2_per_kg: float
    base_score: int
    grade: str
    biodegradable: bool
    decomposition_estimate: str | None = None
    recognized: bool = True

    @classmethod
    def from_profile(cls, profile: FiberImpactProfile, *, recognized: bool = True) -> "FiberProfileOut":
        return cls(
            name=profile.name,
            family=profile.family.value,
            water_per_kg=profile.water_per_kg,
            co2_per_kg=profile.co2_per_kg,
            base_score=profile.base_score,
            grade=score_to_grade(profile.base_score),
            biodegradable=profile.biodegradable,
            decomposition_estimate=profile.decomposition_estimate,
            recognized=recognized,
        )


class ContributionOut(BaseModel):
    name: str
    percentage: float
    water_liters: float
    carbon_kg: float
    profile: FiberProfileOut

    @classmethod
    def from_contribution(cls, contribution: FiberContribution, *, recognized: bool) -> "ContributionOut":
        return cls(
            name=contribution.fiber_name,
            percentage=contribution.percentage,
            water_liters=contribution.water_liters,
            carbon_kg=contribution.carbon_kg,
            profile=FiberProfileOut.from_profile(contribution.profile, recognized=recognized),
        )


class EquivalentsOut(BaseModel):
    cups_of_tea: int
    driving_km: float
    household_water_share_pct: float

    @classmethod
    def from_equivalents(cls, equivalents: ImpactEquivalents) -> "EquivalentsOut":
        return cls(
            cups_of_tea=equivalents.cups_of_tea,
            driving_km=equivalents.driving_km,
            household_water_share_pct=equivalents.household_water_share_pct,
        )


class ImpactRequest(CamelModel):
    fibers: list[FiberIn] = Field(default_factory=list)
    item_type: str | None = Field(default=None, alias="itemType")
    item_weight_grams: float | None = Field(default=None, alias="itemWeightGrams", ge=0)


class ImpactOut(BaseModel):
    score: int
    grade: str
    water_usage_liters: float
    carbon_footprint_kg: float
    item_weight_grams: float
    contributions: list[ContributionOut] = Field(default_factory=list)
    equivalents: EquivalentsOut
    alternatives: list[str] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        impact: ImpactResult,
        *,
        weight_grams: float,
        contributions: list[ContributionOut],
        equivalents: ImpactEquivalents,
        alternatives: list[str],
    ) -> "ImpactOut":
        return cls(
            score=impact.score,
            grade=impact.grade,
            water_usage_liters=impact.water_usage_liters,
            carbon_footprint_kg=impact.carbon_footprint_kg,
            item_weight_grams=weight_grams,
            contributions=contributions,
            equivalents=EquivalentsOut.from_equivalents(equivalents),
            alternatives=alternatives,
        )


class LabelParseRequest(CamelModel):
    text: str = Field(alias="rawText")


class ParsedLabelOut(CamelModel):
    brand: str
    item_type: str = Field(serialization_alias="itemType")
    made_in: str = Field(serialization_alias="madeIn")
    fibers: list[FiberIn]
    raw_text: str = Field(serialization_alias="rawText")
    scan_type: str = Field(serialization_alias="scanType")
    score: int
    grade: str
