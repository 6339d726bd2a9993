"""SQLAlchemy implementation of the session store."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.session import AuthSession
from infrastructure.database.models import SessionModel


class SQLAlchemySessionRepository:
    """SQLAlchemy implementation of ISessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, session: AuthSession) -> AuthSession:
        """Persist a new session."""
        model = SessionModel(sid=session.sid, sess=session.data, expire=session.expires_at)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get(self, sid: str) -> AuthSession | None:
        """Get a session by ID."""
        stmt = select(SessionModel).where(SessionModel.sid == sid)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def delete(self, sid: str) -> bool:
        """Delete a session."""
        stmt = delete(SessionModel).where(SessionModel.sid == sid)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions whose expiry is in the past."""
        stmt = delete(SessionModel).where(SessionModel.expire < now)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    def _to_entity(self, model: SessionModel) -> AuthSession:
        """Convert ORM model to domain entity."""
        return AuthSession(sid=model.sid, data=dict(model.sess), expires_at=model.expire)
