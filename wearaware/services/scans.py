"""Business logic for storing garment scans and their impact."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.catalog.item_types import DEFAULT_ITEM_TYPE, get_item_weight
from wearaware.db import models
from wearaware.impact.calculator import (
    FiberContribution,
    FiberEntry,
    ImpactResult,
    breakdown,
    calculate_impact,
    composition_from_raw,
    suggest_alternatives,
)
from wearaware.impact.equivalents import ImpactEquivalents, describe_equivalents
from wearaware.metrics.prometheus_exporter import (
    impact_calculations_total,
    scans_saved_total,
)
from wearaware.services.errors import (
    GuestAccessError,
    InvalidScanError,
    ScanNotFoundError,
)
from wearaware.services.users import UserService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanBreakdown:
    """Per-fiber detail view of a stored scan."""

    scan: models.Scan
    impact: ImpactResult
    contributions: list[FiberContribution]
    equivalents: ImpactEquivalents
    alternatives: list[str]


def _literal_fibers(fibers: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [
        {"name": fiber.get("name"), "percentage": fiber.get("percentage")}
        for fiber in fibers
    ]


def score_composition(composition: Sequence[FiberEntry], weight_grams: float) -> ImpactResult:
    """Run the calculator and record the outcome."""

    impact = calculate_impact(composition, weight_grams)
    impact_calculations_total.labels(grade=impact.grade).inc()
    return impact


def _apply_impact(scan: models.Scan, impact: ImpactResult) -> None:
    scan.score = impact.score
    scan.grade = impact.grade
    scan.water_usage_liters = impact.water_usage_liters
    scan.carbon_footprint_kg = impact.carbon_footprint_kg


class ScanService:
    """Facade over impact calculation and scan persistence."""

    def __init__(self, user_service: UserService | None = None) -> None:
        self._user_service = user_service or UserService()

    @staticmethod
    def _require_payload(firebase_uid: str | None, fibers: Sequence[Any] | None) -> None:
        if not firebase_uid or not fibers:
            raise InvalidScanError("Missing required fields")

    async def create_scan(
        self,
        session: AsyncSession,
        *,
        firebase_uid: str,
        fibers: Sequence[Mapping[str, Any]],
        brand: str | None = None,
        item_type: str | None = None,
        raw_text: str | None = None,
        scan_type: str | None = None,
    ) -> models.Scan:
        """Calculate the impact of a composition and persist it."""

        self._require_payload(firebase_uid, fibers)

        user = await self._user_service.find_user(session, firebase_uid=firebase_uid)
        weight = get_item_weight(item_type or DEFAULT_ITEM_TYPE)
        impact = score_composition(composition_from_raw(fibers), weight)

        scan = models.Scan(
            user_id=user.id if user else None,
            firebase_uid=firebase_uid,
            brand=brand,
            item_type=item_type,
            item_weight_grams=weight,
            fibers=_literal_fibers(fibers),
            raw_text=raw_text,
            scan_type=scan_type or "camera",
        )
        _apply_impact(scan, impact)
        session.add(scan)
        await session.commit()
        await session.refresh(scan)

        scans_saved_total.labels(operation="create").inc()
        logger.info(
            "Saved scan %s for %s: grade %s, %.2f L, %.2f kg CO2",
            scan.id,
            firebase_uid,
            scan.grade,
            scan.water_usage_liters,
            scan.carbon_footprint_kg,
        )
        return scan

    async def list_history(
        self,
        session: AsyncSession,
        *,
        firebase_uid: str,
    ) -> list[models.Scan]:
        """Return a registered user's scans, newest first."""

        user = await self._user_service.find_user(session, firebase_uid=firebase_uid)
        if user is None:
            raise GuestAccessError("Guest users cannot access scan history")

        stmt = (
            select(models.Scan)
            .where(models.Scan.firebase_uid == firebase_uid)
            .order_by(models.Scan.created_at.desc(), models.Scan.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_scan(
        self,
        session: AsyncSession,
        *,
        scan_id: int,
        firebase_uid: str | None,
    ) -> models.Scan:
        """Return a scan owned by ``firebase_uid``."""

        stmt = select(models.Scan).where(
            models.Scan.id == scan_id,
            models.Scan.firebase_uid == firebase_uid,
        )
        result = await session.execute(stmt)
        scan = result.scalar_one_or_none()
        if scan is None:
            raise ScanNotFoundError("Scan not found or access denied")
        return scan

    async def update_scan(
        self,
        session: AsyncSession,
        *,
        scan_id: int,
        firebase_uid: str,
        fibers: Sequence[Mapping[str, Any]],
        brand: str | None = None,
        item_type: str | None = None,
    ) -> models.Scan:
        """
        Replace the composition of a scan and recompute its impact.

        The stored weight is kept unless the item type changes, in which case
        the new type's default weight applies.
        """

        self._require_payload(firebase_uid, fibers)
        scan = await self.get_scan(session, scan_id=scan_id, firebase_uid=firebase_uid)

        if item_type and item_type.strip().lower() != (scan.item_type or "").strip().lower():
            scan.item_weight_grams = get_item_weight(item_type)

        impact = score_composition(composition_from_raw(fibers), scan.item_weight_grams)
        scan.brand = brand
        scan.item_type = item_type
        scan.fibers = _literal_fibers(fibers)
        _apply_impact(scan, impact)
        session.add(scan)
        await session.commit()
        await session.refresh(scan)

        scans_saved_total.labels(operation="update").inc()
        logger.info("Updated scan %s: grade %s", scan.id, scan.grade)
        return scan

    async def delete_scan(
        self,
        session: AsyncSession,
        *,
        scan_id: int,
        firebase_uid: str | None,
    ) -> None:
        scan = await self.get_scan(session, scan_id=scan_id, firebase_uid=firebase_uid)
        await session.delete(scan)
        await session.commit()
        logger.info("Deleted scan %s", scan_id)

    async def get_breakdown(
        self,
        session: AsyncSession,
        *,
        scan_id: int,
        firebase_uid: str | None,
    ) -> ScanBreakdown:
        """Per-fiber contributions of a stored scan."""

        scan = await self.get_scan(session, scan_id=scan_id, firebase_uid=firebase_uid)
        composition = composition_from_raw(scan.fibers)
        impact = ImpactResult(
            score=scan.score,
            grade=scan.grade,
            water_usage_liters=scan.water_usage_liters,
            carbon_footprint_kg=scan.carbon_footprint_kg,
        )
        return ScanBreakdown(
            scan=scan,
            impact=impact,
            contributions=breakdown(composition, scan.item_weight_grams),
            equivalents=describe_equivalents(impact),
            alternatives=suggest_alternatives(composition),
        )
