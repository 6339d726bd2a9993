"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """Marketplace user, keyed by the identity provider's subject."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=_new_id)
    email: Mapped[str | None] = mapped_column(String(255), unique=True)
    first_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))
    profile_image_url: Mapped[str | None] = mapped_column(String(1024))
    role: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint("role IN ('buyer', 'seller')", name="ck_users_role"),
        nullable=False,
        default="buyer",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    seller_profile: Mapped[Optional["SellerProfileModel"]] = relationship(
        "SellerProfileModel",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )


class SellerProfileModel(Base):
    """Seller business profile. At most one per user."""

    __tablename__ = "seller_profiles"
    __table_args__ = (
        CheckConstraint(
            "experience_years >= 0 AND experience_years <= 50",
            name="ck_seller_profiles_experience_years",
        ),
        CheckConstraint(
            "is_verified IN ('pending', 'verified', 'rejected')",
            name="ck_seller_profiles_is_verified",
        ),
        CheckConstraint(
            "rating >= 0 AND rating <= 50",
            name="ck_seller_profiles_rating",
        ),
        CheckConstraint("review_count >= 0", name="ck_seller_profiles_review_count"),
        Index("ix_seller_profiles_is_verified_created_at", "is_verified", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    service_category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    contact_number: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    service_area: Mapped[str | None] = mapped_column(String(100))
    experience_years: Mapped[int] = mapped_column(Integer, nullable=False)
    is_verified: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    # Tenths of a star: 47 == 4.7
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_range: Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    user: Mapped["UserModel"] = relationship("UserModel", back_populates="seller_profile")


class SessionModel(Base):
    """Server-side session store (sid is a hash of the cookie token)."""

    __tablename__ = "sessions"

    sid: Mapped[str] = mapped_column(String(64), primary_key=True)
    sess: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    expire: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
