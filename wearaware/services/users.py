"""Registration of app users mirrored from the identity provider."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.db import models
from wearaware.services.errors import UserNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """Lookup and creation of user records."""

    async def find_user(
        self,
        session: AsyncSession,
        *,
        firebase_uid: str,
    ) -> models.User | None:
        stmt = select(models.User).where(models.User.firebase_uid == firebase_uid)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def sync_user(
        self,
        session: AsyncSession,
        *,
        firebase_uid: str,
        email: str,
    ) -> tuple[models.User, bool]:
        """Return ``(user, created)`` for an existing or newly stored user."""

        user = await self.find_user(session, firebase_uid=firebase_uid)
        if user:
            return user, False

        user = models.User(firebase_uid=firebase_uid, email=email)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        logger.info("Registered user %s", firebase_uid)
        return user, True

    async def get_user(
        self,
        session: AsyncSession,
        *,
        firebase_uid: str,
    ) -> models.User:
        user = await self.find_user(session, firebase_uid=firebase_uid)
        if user is None:
            raise UserNotFoundError(f"User {firebase_uid} not found")
        return user
