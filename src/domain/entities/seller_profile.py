"""Seller profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import ClassVar
from uuid import uuid4

from domain.entities.user import User

SERVICE_CATEGORIES: tuple[str, ...] = (
    "Plumbing",
    "Electrical",
    "Tutoring",
    "Housekeeping",
    "Carpentry",
    "Cleaning",
    "Gardening",
    "Appliance Repair",
    "Painting",
    "Home Renovation",
    "Pest Control",
    "AC Repair",
)

MIN_EXPERIENCE_YEARS = 0
MAX_EXPERIENCE_YEARS = 50


class VerificationStatus(StrEnum):
    """Admin verification state of a seller profile.

    pending -> verified | rejected. Nothing moves back to pending.
    Only verified profiles are listed publicly.
    """

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class Rating:
    """Fixed-point star rating stored as tenths (47 == 4.7 stars)."""

    SCALE: ClassVar[int] = 10
    MAX_STARS: ClassVar[int] = 5

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= self.MAX_STARS * self.SCALE:
            raise ValueError(f"Rating out of range: {self.value}")

    @classmethod
    def from_stars(cls, stars: float) -> "Rating":
        """Build a rating from a star value, rounded to the nearest tenth."""
        return cls(round(stars * cls.SCALE))

    @property
    def stars(self) -> float:
        """Rating as a float on the 0.0 - 5.0 scale."""
        return self.value / self.SCALE

    def __str__(self) -> str:
        return f"{self.stars:.1f}"


@dataclass
class SellerProfile:
    """Domain entity for a seller's business profile."""

    user_id: str
    business_name: str
    service_category: str
    description: str
    contact_number: str
    address: str
    experience_years: int
    id: str = field(default_factory=lambda: str(uuid4()))
    service_area: str | None = None
    price_range: str | None = None
    is_verified: VerificationStatus = VerificationStatus.PENDING
    rating: Rating = field(default_factory=Rating)
    review_count: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_listed(self) -> bool:
        """Whether buyers can see this profile."""
        return self.is_verified == VerificationStatus.VERIFIED


@dataclass(frozen=True, slots=True)
class SellerProfileWithUser:
    """Read-only value object: a profile with its owner, if the owner row exists."""

    profile: SellerProfile
    user: User | None = None
