"""Reference data and stateless calculation routes."""

from __future__ import annotations

from fastapi import APIRouter

from wearaware.api.schemas import (
    ContributionOut,
    FiberIn,
    FiberProfileOut,
    ImpactOut,
    ImpactRequest,
    ItemTypeEnvelope,
    ItemTypeList,
    ItemTypeOut,
    LabelParseRequest,
    ParsedLabelOut,
)
from wearaware.catalog.item_types import get_item_type, get_item_weight, list_item_types
from wearaware.catalog.label_parser import parse_care_label
from wearaware.impact.calculator import breakdown, composition_from_raw, suggest_alternatives
from wearaware.impact.equivalents import describe_equivalents
from wearaware.impact.fibers import available_fibers, is_known, lookup
from wearaware.services.scans import score_composition

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/item-types")
async def item_types() -> ItemTypeList:
    return ItemTypeList(
        item_types=[ItemTypeOut.from_item_type(item) for item in list_item_types()],
    )


@router.get("/item-types/{name}")
async def item_type(name: str) -> ItemTypeEnvelope:
    """Weight estimate for an item type; unknown types get the 300 g default."""

    return ItemTypeEnvelope(item_type=ItemTypeOut.from_item_type(get_item_type(name)))


@router.get("/fibers")
async def fibers() -> dict[str, list[str]]:
    return {"fibers": available_fibers()}


@router.get("/fibers/{name}")
async def fiber_profile(name: str) -> FiberProfileOut:
    return FiberProfileOut.from_profile(lookup(name), recognized=is_known(name))


@router.post("/impact")
async def calculate(payload: ImpactRequest) -> ImpactOut:
    """
    Score a composition without storing it.

    An explicit ``itemWeightGrams`` wins over the item type's default weight.
    """

    weight = payload.item_weight_grams
    if weight is None:
        weight = get_item_weight(payload.item_type)

    composition = composition_from_raw(fiber.model_dump() for fiber in payload.fibers)
    impact = score_composition(composition, weight)
    return ImpactOut.build(
        impact,
        weight_grams=weight,
        contributions=[
            ContributionOut.from_contribution(item, recognized=is_known(item.fiber_name))
            for item in breakdown(composition, weight)
        ],
        equivalents=describe_equivalents(impact),
        alternatives=suggest_alternatives(composition),
    )


@router.post("/labels/parse")
async def parse_label(payload: LabelParseRequest) -> ParsedLabelOut:
    """Turn OCR text from a care label into a fiber list with a provisional grade."""

    parsed = parse_care_label(payload.text)
    impact = score_composition(parsed.fibers, get_item_weight(parsed.item_type))
    return ParsedLabelOut(
        brand=parsed.brand,
        item_type=parsed.item_type,
        made_in=parsed.made_in,
        fibers=[FiberIn(name=fiber.name, percentage=fiber.percentage) for fiber in parsed.fibers],
        raw_text=parsed.raw_text,
        scan_type=parsed.scan_type,
        score=impact.score,
        grade=impact.grade,
    )
