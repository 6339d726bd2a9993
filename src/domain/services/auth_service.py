"""Authentication bridge: Firebase token exchange and server-side sessions."""

import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog

from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.session import (
    SESSION_TTL_DAYS,
    AuthSession,
    FirebaseSession,
    PlatformSession,
    hash_session_token,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IIdentityVerifier

logger = structlog.get_logger()


class AuthService:
    """Turns verified identities into persisted users and sessions."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        identity_verifier: IIdentityVerifier,
        session_ttl: timedelta = timedelta(days=SESSION_TTL_DAYS),
    ) -> None:
        self._uow_factory = uow_factory
        self._verifier = identity_verifier
        self._session_ttl = session_ttl

    async def login_with_firebase(self, id_token: str) -> tuple[User, str]:
        """Exchange a Firebase ID token for a user row and a session.

        Returns:
            Tuple of (User, raw_session_token). Only the hash of the token is
            stored; the raw token goes into the session cookie.

        Raises:
            AuthenticationError: If the token is invalid, expired or revoked.
        """
        identity = await self._verifier.verify(id_token)
        if identity is None:
            raise AuthenticationError(
                message="Invalid Firebase token",
                error_code=ErrorCode.INVALID_TOKEN,
            )

        first_name, last_name = User.split_display_name(identity.name)
        raw_token = secrets.token_urlsafe(32)

        async with self._uow_factory() as uow:
            user = await uow.users.upsert(
                User(
                    id=identity.uid,
                    email=identity.email,
                    first_name=first_name,
                    last_name=last_name,
                    profile_image_url=identity.picture,
                )
            )
            await uow.sessions.create(
                AuthSession.for_firebase_user(
                    sid=hash_session_token(raw_token),
                    subject=user.id,
                    email=user.email,
                    display_name=identity.name,
                    ttl=self._session_ttl,
                )
            )
            await uow.commit()

        logger.info("firebase_login", user_id=user.id)
        return user, raw_token

    async def resolve_session(self, raw_token: str) -> Optional[FirebaseSession]:
        """Load the principal behind a session cookie, or None.

        Expired sessions are deleted on sight.
        """
        sid = hash_session_token(raw_token)
        async with self._uow_factory() as uow:
            session = await uow.sessions.get(sid)
            if session is None:
                return None
            if session.is_expired:
                await uow.sessions.delete(sid)
                await uow.commit()
                return None
            return session.to_principal()

    async def logout(self, raw_token: str) -> bool:
        """Destroy the session behind a cookie token."""
        async with self._uow_factory() as uow:
            deleted = await uow.sessions.delete(hash_session_token(raw_token))
            await uow.commit()
            return deleted  # type: ignore[no-any-return]

    async def sync_platform_user(self, principal: PlatformSession) -> None:
        """Make sure a platform-token user has a users row."""
        first_name, last_name = User.split_display_name(principal.display_name)
        async with self._uow_factory() as uow:
            await uow.users.ensure_exists(
                User(
                    id=principal.subject,
                    email=principal.email,
                    first_name=first_name,
                    last_name=last_name,
                )
            )
            await uow.commit()

    async def prune_expired_sessions(self) -> int:
        """Delete all expired sessions and return how many were removed."""
        async with self._uow_factory() as uow:
            deleted = await uow.sessions.delete_expired(datetime.utcnow())
            await uow.commit()
            return deleted  # type: ignore[no-any-return]
