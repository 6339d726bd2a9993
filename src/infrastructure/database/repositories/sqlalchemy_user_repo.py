"""SQLAlchemy implementation of User repository."""

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import User, UserRole
from infrastructure.database.models import UserModel

# Profile fields an upsert may overwrite. role and created_at are never touched.
_UPSERT_FIELDS = ("email", "first_name", "last_name", "profile_image_url")


def user_to_entity(model: UserModel) -> User:
    """Convert ORM model to domain entity."""
    return User(
        id=model.id,
        email=model.email,
        first_name=model.first_name,
        last_name=model.last_name,
        profile_image_url=model.profile_image_url,
        role=UserRole(model.role),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return user_to_entity(model) if model else None

    async def upsert(self, user: User) -> User:
        """Insert or update a user in a single INSERT ... ON CONFLICT statement."""
        values = self._to_values(user)
        supplied = {key: values[key] for key in _UPSERT_FIELDS if values[key] is not None}
        supplied["updated_at"] = datetime.utcnow()

        stmt = (
            self._insert()
            .values(**values)
            .on_conflict_do_update(index_elements=[UserModel.id], set_=supplied)
            .returning(UserModel)
        )
        result = await self._session.scalars(
            stmt, execution_options={"populate_existing": True}
        )
        return user_to_entity(result.one())

    async def ensure_exists(self, user: User) -> None:
        """Insert a user unless one with the same ID exists."""
        stmt = (
            self._insert()
            .values(**self._to_values(user))
            .on_conflict_do_nothing(index_elements=[UserModel.id])
        )
        await self._session.execute(stmt)

    async def update_role(self, id: str, role: UserRole) -> bool:
        """Set a user's role. Returns False when no row matched."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == id)
            .values(role=role.value, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    def _insert(self) -> Any:
        """Dialect-specific INSERT supporting ON CONFLICT."""
        if self._session.bind is not None and self._session.bind.dialect.name == "sqlite":
            return sqlite_insert(UserModel)
        return pg_insert(UserModel)

    def _to_values(self, entity: User) -> dict[str, Any]:
        """Convert domain entity to column values."""
        return {
            "id": entity.id,
            "email": entity.email,
            "first_name": entity.first_name,
            "last_name": entity.last_name,
            "profile_image_url": entity.profile_image_url,
            "role": entity.role.value,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }
