"""Authentication session entities.

Two kinds of credentials reach the API:

* a bearer JWT issued by the hosting platform (``PlatformSession``), and
* a server-side session created after a Firebase ID token exchange
  (``FirebaseSession``), carried in an HttpOnly cookie.

Both are ``SessionPrincipal`` values. ``normalize_principal`` turns either
into the single ``AuthenticatedUser`` shape every route consumes.
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any, Literal

SESSION_TTL_DAYS = 7


class PrincipalKind(StrEnum):
    """Source of an authenticated identity."""

    PLATFORM = "platform"
    FIREBASE = "firebase"


@dataclass(frozen=True)
class PlatformSession:
    """Identity asserted by a platform-issued JWT."""

    subject: str
    issued_at: datetime
    expires_at: datetime
    email: str | None = None
    display_name: str | None = None
    kind: Literal[PrincipalKind.PLATFORM] = PrincipalKind.PLATFORM


@dataclass(frozen=True)
class FirebaseSession:
    """Identity restored from a server-side session created at Firebase login."""

    session_id: str
    subject: str
    issued_at: datetime
    expires_at: datetime
    email: str | None = None
    display_name: str | None = None
    kind: Literal[PrincipalKind.FIREBASE] = PrincipalKind.FIREBASE


SessionPrincipal = PlatformSession | FirebaseSession


@dataclass(frozen=True)
class AuthenticatedUser:
    """Canonical identity of the caller, independent of how they authenticated."""

    id: str
    issued_at: datetime
    expires_at: datetime
    kind: PrincipalKind
    email: str | None = None
    name: str | None = None


def normalize_principal(principal: SessionPrincipal) -> AuthenticatedUser:
    """Collapse either principal kind into an AuthenticatedUser."""
    return AuthenticatedUser(
        id=principal.subject,
        email=principal.email,
        name=principal.display_name,
        issued_at=principal.issued_at,
        expires_at=principal.expires_at,
        kind=principal.kind,
    )


def hash_session_token(token: str) -> str:
    """Hash a raw cookie token; only the digest is stored."""
    return hashlib.sha256(token.encode()).hexdigest()


@dataclass
class AuthSession:
    """A persisted server-side session row."""

    sid: str
    data: dict[str, Any]
    expires_at: datetime = field(
        default_factory=lambda: datetime.utcnow() + timedelta(days=SESSION_TTL_DAYS)
    )

    @property
    def is_expired(self) -> bool:
        """Check if the session has expired."""
        return datetime.utcnow() >= self.expires_at

    @classmethod
    def for_firebase_user(
        cls,
        sid: str,
        subject: str,
        email: str | None,
        display_name: str | None,
        ttl: timedelta,
    ) -> "AuthSession":
        """Build the session row written after a successful Firebase login."""
        issued_at = datetime.utcnow()
        return cls(
            sid=sid,
            data={
                "kind": PrincipalKind.FIREBASE.value,
                "claims": {
                    "sub": subject,
                    "email": email,
                    "name": display_name,
                    "iat": issued_at.isoformat(),
                },
            },
            expires_at=issued_at + ttl,
        )

    def to_principal(self) -> FirebaseSession | None:
        """Rebuild the principal stored in this session, if it is well-formed."""
        if self.data.get("kind") != PrincipalKind.FIREBASE.value:
            return None
        claims = self.data.get("claims") or {}
        subject = claims.get("sub")
        if not subject:
            return None
        issued_raw = claims.get("iat")
        issued_at = datetime.fromisoformat(issued_raw) if issued_raw else self.expires_at
        return FirebaseSession(
            session_id=self.sid,
            subject=subject,
            email=claims.get("email"),
            display_name=claims.get("name"),
            issued_at=issued_at,
            expires_at=self.expires_at,
        )
