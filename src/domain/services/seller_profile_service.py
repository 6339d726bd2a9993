"""Seller profile service layer with business logic."""

from typing import Callable, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    DuplicateSellerProfileError,
    SellerProfileNotFoundError,
    UserNotFoundError,
)
from domain.entities.seller_profile import SellerProfile, SellerProfileWithUser
from domain.entities.user import UserRole
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig


class SellerProfileService:
    """Service layer for seller registration and listings."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def register(
        self,
        user_id: str,
        business_name: str,
        service_category: str,
        description: str,
        contact_number: str,
        address: str,
        experience_years: int,
        service_area: Optional[str] = None,
        price_range: Optional[str] = None,
    ) -> SellerProfile:
        """Create the caller's seller profile and promote them to seller.

        Both writes share one transaction. A concurrent registration for the
        same user loses on the unique user_id constraint and is reported as a
        duplicate rather than a server error.

        Raises:
            DuplicateSellerProfileError: If the user already owns a profile.
            UserNotFoundError: If the user row does not exist.
        """
        async with self._uow_factory() as uow:
            existing = await uow.seller_profiles.get_by_user_id(user_id)
            if existing:
                raise DuplicateSellerProfileError(user_id)

            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(user_id)

            profile = SellerProfile(
                user_id=user_id,
                business_name=business_name,
                service_category=service_category,
                description=description,
                contact_number=contact_number,
                address=address,
                experience_years=experience_years,
                service_area=service_area,
                price_range=price_range,
            )

            try:
                created = await uow.seller_profiles.create(profile)
            except IntegrityError as exc:
                await uow.rollback()
                # Only a unique violation means another request won the race
                if _is_unique_violation(exc):
                    logger.info("seller_profile_race_lost", user_id=user_id)
                    raise DuplicateSellerProfileError(user_id) from exc
                raise

            promoted = await uow.users.update_role(user_id, UserRole.SELLER)
            if not promoted:
                raise UserNotFoundError(user_id)

            await uow.commit()

        logger.info(
            "seller_profile_created",
            user_id=user_id,
            profile_id=created.id,
            service_category=created.service_category,
        )
        return created

    async def has_profile(self, user_id: str) -> bool:
        """Whether the user already owns a seller profile."""
        async with self._uow_factory() as uow:
            return await uow.seller_profiles.get_by_user_id(user_id) is not None

    async def get_for_user(self, user_id: str) -> SellerProfile:
        """Get the profile owned by a user."""
        async with self._uow_factory() as uow:
            profile = await uow.seller_profiles.get_by_user_id(user_id)
            if not profile:
                raise SellerProfileNotFoundError(user_id)
            return profile

    async def list_verified(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[SellerProfileWithUser]:
        """List publicly visible profiles, optionally filtered."""
        search = search.strip() if search else None
        async with self._uow_factory() as uow:
            return await uow.seller_profiles.list_verified(  # type: ignore[no-any-return]
                category=category or None,
                search=search or None,
            )
