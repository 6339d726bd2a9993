"""Seller profile API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_seller_profile_service
from api.schemas.common import ErrorResponse
from api.schemas.seller_profile import (
    SellerListingResponse,
    SellerProfileCreate,
    SellerProfileResponse,
)
from core.exceptions import DuplicateSellerProfileError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.seller_profile import SERVICE_CATEGORIES
from domain.entities.session import AuthenticatedUser
from domain.services.seller_profile_service import SellerProfileService

router = APIRouter(tags=["seller-profiles"])


async def require_no_seller_profile(
    user: CurrentUser,
    service: SellerProfileService = Depends(get_seller_profile_service),
) -> AuthenticatedUser:
    """Reject callers who already own a profile, before the body is validated."""
    if await service.has_profile(user.id):
        raise DuplicateSellerProfileError(user.id)
    return user


@router.post(
    "/seller-profile",
    response_model=SellerProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as a seller",
    responses={
        201: {"description": "Profile created; caller is now a seller"},
        400: {"model": ErrorResponse, "description": "Validation failed or profile already exists"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_seller_profile(
    request: Request,
    body: SellerProfileCreate,
    user: Annotated[AuthenticatedUser, Depends(require_no_seller_profile)],
    service: SellerProfileService = Depends(get_seller_profile_service),
) -> SellerProfileResponse:
    """Create the caller's seller profile. It starts out pending verification."""
    profile = await service.register(
        user_id=user.id,
        business_name=body.business_name,
        service_category=body.service_category,
        description=body.description,
        contact_number=body.contact_number,
        address=body.address,
        experience_years=body.experience_years,
        service_area=body.service_area,
        price_range=body.price_range,
    )
    return SellerProfileResponse.from_entity(profile)


@router.get(
    "/seller-profile/me",
    response_model=SellerProfileResponse,
    summary="Get my seller profile",
    responses={404: {"model": ErrorResponse, "description": "Caller has no seller profile"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_seller_profile(
    request: Request,
    user: CurrentUser,
    service: SellerProfileService = Depends(get_seller_profile_service),
) -> SellerProfileResponse:
    """Return the caller's own profile regardless of verification state."""
    profile = await service.get_for_user(user.id)
    return SellerProfileResponse.from_entity(profile)


@router.get(
    "/seller-profiles",
    response_model=list[SellerListingResponse],
    summary="List verified sellers",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_seller_profiles(
    request: Request,
    category: str | None = Query(None, description="Exact service category"),
    search: str | None = Query(None, description="Matches business name or description"),
    service: SellerProfileService = Depends(get_seller_profile_service),
) -> list[SellerListingResponse]:
    """Public listing of verified sellers, each with its owner embedded."""
    listings = await service.list_verified(category=category, search=search)
    return [SellerListingResponse.from_listing(listing) for listing in listings]


@router.get(
    "/service-categories",
    response_model=list[str],
    summary="List service categories",
)
async def list_service_categories() -> list[str]:
    """The fixed set of categories a seller can register under."""
    return list(SERVICE_CATEGORIES)
