"""SQLAlchemy implementation of SellerProfile repository."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.seller_profile import (
    Rating,
    SellerProfile,
    SellerProfileWithUser,
    VerificationStatus,
)
from infrastructure.database.models import SellerProfileModel, UserModel
from infrastructure.database.repositories.sqlalchemy_user_repo import user_to_entity


class SQLAlchemySellerProfileRepository:
    """SQLAlchemy implementation of ISellerProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, profile: SellerProfile) -> SellerProfile:
        """Create a new seller profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_by_user_id(self, user_id: str) -> SellerProfile | None:
        """Get the profile owned by a user."""
        stmt = select(SellerProfileModel).where(SellerProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_verified(
        self,
        category: str | None = None,
        search: str | None = None,
    ) -> list[SellerProfileWithUser]:
        """List verified profiles joined with their owners."""
        stmt = (
            select(SellerProfileModel, UserModel)
            .outerjoin(UserModel, SellerProfileModel.user_id == UserModel.id)
            .where(SellerProfileModel.is_verified == VerificationStatus.VERIFIED.value)
        )
        if category:
            stmt = stmt.where(SellerProfileModel.service_category == category)
        if search:
            # Literal substring match: % and _ in the query are not wildcards
            stmt = stmt.where(
                or_(
                    SellerProfileModel.business_name.icontains(search, autoescape=True),
                    SellerProfileModel.description.icontains(search, autoescape=True),
                )
            )
        stmt = stmt.order_by(SellerProfileModel.created_at, SellerProfileModel.id)

        result = await self._session.execute(stmt)
        return [
            SellerProfileWithUser(
                profile=self._to_entity(profile_model),
                user=user_to_entity(user_model) if user_model else None,
            )
            for profile_model, user_model in result
        ]

    def _to_entity(self, model: SellerProfileModel) -> SellerProfile:
        """Convert ORM model to domain entity."""
        return SellerProfile(
            id=model.id,
            user_id=model.user_id,
            business_name=model.business_name,
            service_category=model.service_category,
            description=model.description,
            contact_number=model.contact_number,
            address=model.address,
            service_area=model.service_area,
            experience_years=model.experience_years,
            is_verified=VerificationStatus(model.is_verified),
            rating=Rating(model.rating or 0),
            review_count=model.review_count or 0,
            price_range=model.price_range,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: SellerProfile) -> SellerProfileModel:
        """Convert domain entity to ORM model."""
        return SellerProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            business_name=entity.business_name,
            service_category=entity.service_category,
            description=entity.description,
            contact_number=entity.contact_number,
            address=entity.address,
            service_area=entity.service_area,
            experience_years=entity.experience_years,
            is_verified=entity.is_verified.value,
            rating=entity.rating.value,
            review_count=entity.review_count,
            price_range=entity.price_range,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
