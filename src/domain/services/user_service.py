"""User service layer."""

from typing import Callable

from core.exceptions import UserNotFoundError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork


class UserService:
    """Service layer for User lookups."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get(self, user_id: str) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(user_id)
            return user
