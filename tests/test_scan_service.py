"""Tests for scan persistence and recalculation."""

from __future__ import annotations

import pytest
from prometheus_client import REGISTRY
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.impact.calculator import FiberEntry, calculate_impact
from wearaware.services.errors import GuestAccessError, InvalidScanError, ScanNotFoundError
from wearaware.services.scans import ScanService
from wearaware.services.users import UserService

BLEND = [{"name": "Cotton", "percentage": 60}, {"name": "Polyester", "percentage": 40}]


def _saved(operation: str) -> float:
    return REGISTRY.get_sample_value("scans_saved_total", {"operation": operation}) or 0.0


@pytest.fixture
def service() -> ScanService:
    return ScanService(UserService())


@pytest.mark.asyncio
async def test_create_scan_uses_item_type_weight(session: AsyncSession, service: ScanService) -> None:
    user, _ = await UserService().sync_user(session, firebase_uid="uid-1", email="a@example.com")
    before = _saved("create")

    scan = await service.create_scan(
        session,
        firebase_uid="uid-1",
        fibers=BLEND,
        brand="ACME",
        item_type="jeans",
    )

    expected = calculate_impact([FiberEntry("Cotton", 60), FiberEntry("Polyester", 40)], 600)
    assert scan.user_id == user.id
    assert scan.item_weight_grams == 600
    assert scan.score == expected.score
    assert scan.grade == expected.grade
    assert scan.water_usage_liters == expected.water_usage_liters
    assert scan.carbon_footprint_kg == expected.carbon_footprint_kg
    assert scan.fibers == BLEND
    assert scan.scan_type == "camera"
    assert _saved("create") == before + 1


@pytest.mark.asyncio
async def test_guest_scan_defaults(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(
        session,
        firebase_uid="guest",
        fibers=[{"name": "Linen", "percentage": 100}],
        scan_type="manual",
    )

    assert scan.user_id is None
    assert scan.item_weight_grams == 300
    assert scan.grade == "A"
    assert scan.scan_type == "manual"


@pytest.mark.asyncio
@pytest.mark.parametrize(("uid", "fibers"), [("", BLEND), ("uid-1", [])])
async def test_create_scan_requires_owner_and_fibers(
    session: AsyncSession, service: ScanService, uid: str, fibers: list
) -> None:
    with pytest.raises(InvalidScanError):
        await service.create_scan(session, firebase_uid=uid, fibers=fibers)


@pytest.mark.asyncio
async def test_history_is_for_registered_users_only(session: AsyncSession, service: ScanService) -> None:
    await service.create_scan(session, firebase_uid="guest", fibers=BLEND)

    with pytest.raises(GuestAccessError):
        await service.list_history(session, firebase_uid="guest")


@pytest.mark.asyncio
async def test_history_newest_first(session: AsyncSession, service: ScanService) -> None:
    await UserService().sync_user(session, firebase_uid="uid-2", email="b@example.com")
    first = await service.create_scan(session, firebase_uid="uid-2", fibers=BLEND)
    second = await service.create_scan(session, firebase_uid="uid-2", fibers=BLEND)
    await service.create_scan(session, firebase_uid="someone-else", fibers=BLEND)

    history = await service.list_history(session, firebase_uid="uid-2")

    assert [scan.id for scan in history] == [second.id, first.id]


@pytest.mark.asyncio
async def test_scans_are_private(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(session, firebase_uid="owner", fibers=BLEND)

    with pytest.raises(ScanNotFoundError):
        await service.get_scan(session, scan_id=scan.id, firebase_uid="intruder")
    with pytest.raises(ScanNotFoundError):
        await service.delete_scan(session, scan_id=scan.id, firebase_uid="intruder")


@pytest.mark.asyncio
async def test_update_keeps_stored_weight(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(session, firebase_uid="owner", fibers=BLEND, item_type="Coat")

    updated = await service.update_scan(
        session,
        scan_id=scan.id,
        firebase_uid="owner",
        fibers=[{"name": "Wool", "percentage": 100}],
        item_type="coat",
    )

    expected = calculate_impact([FiberEntry("Wool", 100)], 800)
    assert updated.item_weight_grams == 800
    assert updated.score == 45
    assert updated.grade == "D"
    assert updated.water_usage_liters == expected.water_usage_liters
    assert updated.fibers == [{"name": "Wool", "percentage": 100}]


@pytest.mark.asyncio
async def test_update_with_new_item_type_uses_its_weight(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(session, firebase_uid="owner", fibers=BLEND, item_type="Coat")

    updated = await service.update_scan(
        session,
        scan_id=scan.id,
        firebase_uid="owner",
        fibers=BLEND,
        brand="New brand",
        item_type="Socks",
    )

    assert updated.item_weight_grams == 40
    assert updated.brand == "New brand"
    assert updated.water_usage_liters == calculate_impact(
        [FiberEntry("Cotton", 60), FiberEntry("Polyester", 40)], 40
    ).water_usage_liters


@pytest.mark.asyncio
async def test_delete_scan(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(session, firebase_uid="owner", fibers=BLEND)

    await service.delete_scan(session, scan_id=scan.id, firebase_uid="owner")

    with pytest.raises(ScanNotFoundError):
        await service.get_scan(session, scan_id=scan.id, firebase_uid="owner")


@pytest.mark.asyncio
async def test_breakdown_of_stored_scan(session: AsyncSession, service: ScanService) -> None:
    scan = await service.create_scan(session, firebase_uid="owner", fibers=BLEND)

    detail = await service.get_breakdown(session, scan_id=scan.id, firebase_uid="owner")

    assert detail.impact.score == 48
    assert [item.fiber_name for item in detail.contributions] == ["Cotton", "Polyester"]
    assert detail.contributions[0].water_liters == pytest.approx(1800.0)
    assert detail.equivalents.cups_of_tea == 226
    assert detail.alternatives == ["Organic Cotton", "Recycled Polyester", "Hemp", "Linen"]


@pytest.mark.asyncio
async def test_sync_user_is_idempotent(session: AsyncSession) -> None:
    users = UserService()

    first, created = await users.sync_user(session, firebase_uid="uid-9", email="c@example.com")
    again, created_again = await users.sync_user(session, firebase_uid="uid-9", email="c@example.com")

    assert created and not created_again
    assert first.id == again.id
