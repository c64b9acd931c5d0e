"""User sync routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wearaware.api.dependencies import SessionDependency, UserServiceDependency
from wearaware.api.schemas import UserEnvelope, UserOut, UserSync
from wearaware.services.errors import UserNotFoundError
from wearaware.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/sync")
async def sync_user(
    payload: UserSync,
    session: AsyncSession = SessionDependency,
    users: UserService = UserServiceDependency,
) -> UserEnvelope:
    """Create the user on first sign-in, return the stored record afterwards."""

    if not payload.firebase_uid or not payload.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Firebase UID and email required",
        )

    user, created = await users.sync_user(
        session,
        firebase_uid=payload.firebase_uid,
        email=payload.email,
    )
    return UserEnvelope(
        user=UserOut.model_validate(user),
        message="User created" if created else "User found",
    )


@router.get("/{firebase_uid}")
async def get_user(
    firebase_uid: str,
    session: AsyncSession = SessionDependency,
    users: UserService = UserServiceDependency,
) -> UserEnvelope:
    try:
        user = await users.get_user(session, firebase_uid=firebase_uid)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return UserEnvelope(user=UserOut.model_validate(user))
