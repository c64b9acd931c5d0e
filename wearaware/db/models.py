"""SQLAlchemy models describing users and their garment scans."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )


class User(Base):
    """Registered app user, keyed by the identity provider's uid."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    firebase_uid: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255))

    scans: Mapped[list["Scan"]] = relationship(back_populates="owner")


class Scan(Base):
    """Garment composition together with its computed environmental impact."""

    __tablename__ = "scans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    firebase_uid: Mapped[str] = mapped_column(String(128), index=True)
    brand: Mapped[str | None] = mapped_column(String(128))
    item_type: Mapped[str | None] = mapped_column(String(64))
    item_weight_grams: Mapped[int] = mapped_column(Integer, nullable=False)
    fibers: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    grade: Mapped[str] = mapped_column(String(1), nullable=False)
    water_usage_liters: Mapped[float] = mapped_column(Float, nullable=False)
    carbon_footprint_kg: Mapped[float] = mapped_column(Float, nullable=False)
    raw_text: Mapped[str | None] = mapped_column(Text)
    scan_type: Mapped[str] = mapped_column(String(16), default="camera")

    owner: Mapped[User | None] = relationship(back_populates="scans")
