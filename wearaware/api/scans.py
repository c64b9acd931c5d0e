"""Scan CRUD routes; every write recalculates the garment's impact."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.api.dependencies import ScanServiceDependency, SessionDependency
from wearaware.api.schemas import (
    Acknowledgement,
    ContributionOut,
    ImpactOut,
    ScanCreate,
    ScanEnvelope,
    ScanHistory,
    ScanOut,
    ScanUpdate,
)
from wearaware.impact.fibers import is_known
from wearaware.services.errors import GuestAccessError, InvalidScanError, ScanNotFoundError
from wearaware.services.scans import ScanService

router = APIRouter(prefix="/api/scans", tags=["scans"])


def _not_found(exc: ScanNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post("")
async def create_scan(
    payload: ScanCreate,
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> ScanEnvelope:
    try:
        scan = await scans.create_scan(
            session,
            firebase_uid=payload.firebase_uid or "",
            fibers=[fiber.model_dump() for fiber in payload.fibers],
            brand=payload.brand,
            item_type=payload.item_type,
            raw_text=payload.raw_text,
            scan_type=payload.scan_type,
        )
    except InvalidScanError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ScanEnvelope(scan=ScanOut.model_validate(scan), scan_id=scan.id)


@router.get("/history/{firebase_uid}")
async def scan_history(
    firebase_uid: str,
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> ScanHistory:
    """Scans of a registered user, newest first."""

    try:
        history = await scans.list_history(session, firebase_uid=firebase_uid)
    except GuestAccessError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return ScanHistory(scans=[ScanOut.model_validate(scan) for scan in history])


@router.get("/{scan_id}")
async def get_scan(
    scan_id: int,
    firebase_uid: str | None = Query(default=None, alias="firebaseUid"),
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> ScanEnvelope:
    try:
        scan = await scans.get_scan(session, scan_id=scan_id, firebase_uid=firebase_uid)
    except ScanNotFoundError as exc:
        raise _not_found(exc) from exc
    return ScanEnvelope(scan=ScanOut.model_validate(scan))


@router.get("/{scan_id}/breakdown")
async def get_scan_breakdown(
    scan_id: int,
    firebase_uid: str | None = Query(default=None, alias="firebaseUid"),
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> ImpactOut:
    """Per-fiber contributions, everyday equivalents and greener substitutes."""

    try:
        detail = await scans.get_breakdown(session, scan_id=scan_id, firebase_uid=firebase_uid)
    except ScanNotFoundError as exc:
        raise _not_found(exc) from exc

    return ImpactOut.build(
        detail.impact,
        weight_grams=detail.scan.item_weight_grams,
        contributions=[
            ContributionOut.from_contribution(item, recognized=is_known(item.fiber_name))
            for item in detail.contributions
        ],
        equivalents=detail.equivalents,
        alternatives=detail.alternatives,
    )


@router.put("/{scan_id}")
async def update_scan(
    scan_id: int,
    payload: ScanUpdate,
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> ScanEnvelope:
    try:
        scan = await scans.update_scan(
            session,
            scan_id=scan_id,
            firebase_uid=payload.firebase_uid or "",
            fibers=[fiber.model_dump() for fiber in payload.fibers],
            brand=payload.brand,
            item_type=payload.item_type,
        )
    except InvalidScanError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScanNotFoundError as exc:
        raise _not_found(exc) from exc
    return ScanEnvelope(scan=ScanOut.model_validate(scan))


@router.delete("/{scan_id}")
async def delete_scan(
    scan_id: int,
    firebase_uid: str | None = Query(default=None, alias="firebaseUid"),
    session: AsyncSession = SessionDependency,
    scans: ScanService = ScanServiceDependency,
) -> Acknowledgement:
    try:
        await scans.delete_scan(session, scan_id=scan_id, firebase_uid=firebase_uid)
    except ScanNotFoundError as exc:
        raise _not_found(exc) from exc
    return Acknowledgement(message="Scan deleted")
