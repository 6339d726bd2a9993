"""Pydantic schemas for SellerProfile API."""

from datetime import datetime
from typing import Annotated, Callable

from pydantic import AfterValidator, ConfigDict, Strict
from pydantic_core import PydanticCustomError

from api.schemas.common import CamelModel
from api.schemas.user import UserResponse
from domain.entities.seller_profile import (
    MAX_EXPERIENCE_YEARS,
    MIN_EXPERIENCE_YEARS,
    SERVICE_CATEGORIES,
    SellerProfile,
    SellerProfileWithUser,
    VerificationStatus,
)


def _min_length(minimum: int, message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if len(value) < minimum:
            raise PydanticCustomError("too_short", message)
        return value

    return check


def _check_category(value: str) -> str:
    if not value:
        raise PydanticCustomError("missing_category", "Please select a service category")
    if value not in SERVICE_CATEGORIES:
        raise PydanticCustomError(
            "unknown_category",
            "Unknown service category: {category}",
            {"category": value},
        )
    return value


def _check_experience(value: int) -> int:
    if value < MIN_EXPERIENCE_YEARS:
        raise PydanticCustomError("too_small", "Experience cannot be negative")
    if value > MAX_EXPERIENCE_YEARS:
        raise PydanticCustomError("too_large", "Please enter valid years of experience")
    return value


BusinessName = Annotated[
    str, AfterValidator(_min_length(2, "Business name must be at least 2 characters"))
]
Description = Annotated[
    str, AfterValidator(_min_length(20, "Description must be at least 20 characters"))
]
ContactNumber = Annotated[
    str, AfterValidator(_min_length(10, "Please enter a valid contact number"))
]
Address = Annotated[
    str, AfterValidator(_min_length(10, "Address must be at least 10 characters"))
]
ServiceCategory = Annotated[str, AfterValidator(_check_category)]
# Whole numbers only: "20", 20.0 and true are rejected rather than coerced
ExperienceYears = Annotated[int, Strict(), AfterValidator(_check_experience)]


class SellerProfileCreate(CamelModel):
    """Schema for registering as a seller.

    Server-assigned fields (id, userId, isVerified, rating, reviewCount,
    timestamps) are not accepted.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "businessName": "Sharma Plumbing",
                "serviceCategory": "Plumbing",
                "description": "20+ years of experience fixing pipes and leaks reliably.",
                "contactNumber": "9876543210",
                "address": "12 MG Road, Mumbai, India",
                "experienceYears": 20,
                "serviceArea": "South Mumbai",
                "priceRange": "₹500-1000/hr",
            }
        },
    )

    business_name: BusinessName
    service_category: ServiceCategory
    description: Description
    contact_number: ContactNumber
    address: Address
    experience_years: ExperienceYears
    service_area: str | None = None
    price_range: str | None = None


class SellerProfileResponse(CamelModel):
    """Schema for SellerProfile response."""

    id: str
    user_id: str
    business_name: str
    service_category: str
    description: str
    contact_number: str
    address: str
    service_area: str | None = None
    price_range: str | None = None
    experience_years: int
    is_verified: VerificationStatus
    # Tenths of a star, as stored
    rating: int
    rating_average: float
    review_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: SellerProfile) -> "SellerProfileResponse":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            business_name=profile.business_name,
            service_category=profile.service_category,
            description=profile.description,
            contact_number=profile.contact_number,
            address=profile.address,
            service_area=profile.service_area,
            price_range=profile.price_range,
            experience_years=profile.experience_years,
            is_verified=profile.is_verified,
            rating=profile.rating.value,
            rating_average=profile.rating.stars,
            review_count=profile.review_count,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class SellerListingResponse(SellerProfileResponse):
    """A verified profile with its owner embedded."""

    user: UserResponse | None = None

    @classmethod
    def from_listing(cls, listing: SellerProfileWithUser) -> "SellerListingResponse":
        base = SellerProfileResponse.from_entity(listing.profile)
        return cls(
            **base.model_dump(),
            user=UserResponse.from_entity(listing.user) if listing.user else None,
        )
