"""User repository protocol."""

from typing import Protocol

from domain.entities.user import User, UserRole


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: str) -> User | None:
        """Get a user by ID."""
        ...

    async def upsert(self, user: User) -> User:
        """Insert a user, or overwrite the supplied fields of an existing one."""
        ...

    async def ensure_exists(self, user: User) -> None:
        """Insert a user unless a row with the same ID already exists."""
        ...

    async def update_role(self, id: str, role: UserRole) -> bool:
        """Set a user's role. Returns False if no such user exists."""
        ...
