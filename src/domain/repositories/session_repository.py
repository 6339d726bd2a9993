"""Session repository protocol."""

from datetime import datetime
from typing import Protocol

from domain.entities.session import AuthSession


class ISessionRepository(Protocol):
    """Repository interface for server-side sessions."""

    async def create(self, session: AuthSession) -> AuthSession:
        """Persist a new session."""
        ...

    async def get(self, sid: str) -> AuthSession | None:
        """Get a session by its (hashed) ID."""
        ...

    async def delete(self, sid: str) -> bool:
        """Delete a session and return success status."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions that expired before ``now``; return how many."""
        ...
