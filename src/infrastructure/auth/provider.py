"""Authentication provider protocols."""

from dataclasses import dataclass
from typing import Optional, Protocol

from domain.entities.session import PlatformSession


@dataclass(frozen=True)
class FirebaseIdentity:
    """Claims extracted from a verified Firebase ID token."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for platform bearer-token providers."""

    async def validate_token(self, token: str) -> Optional[PlatformSession]:
        """
        Validate a platform-issued bearer token.

        Args:
            token: The bearer token to validate

        Returns:
            PlatformSession if valid, None if invalid
        """
        ...

    def create_token(self, principal: PlatformSession) -> str:
        """
        Create a bearer token for a principal.

        Args:
            principal: The identity to encode

        Returns:
            The generated token string
        """
        ...


class IIdentityVerifier(Protocol):
    """Protocol for third-party identity token verifiers."""

    async def verify(self, token: str) -> Optional[FirebaseIdentity]:
        """
        Verify an identity token with the identity provider.

        Returns:
            FirebaseIdentity if valid, None if invalid, expired or revoked
        """
        ...
