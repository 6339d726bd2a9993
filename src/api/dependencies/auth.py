"""Authentication dependencies for FastAPI.

A request is authenticated by, in order:

1. the session cookie set by ``POST /api/auth/firebase``, or
2. a platform-issued ``Authorization: Bearer`` JWT.

Either way the route receives an ``AuthenticatedUser``.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_auth_service
from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.session import AuthenticatedUser, SessionPrincipal, normalize_principal
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider

# Security schemes for OpenAPI docs
bearer_scheme = HTTPBearer(auto_error=False)
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_session_principal(
    session_token: Annotated[str | None, Depends(session_cookie)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(bearer_scheme),
    ],
    auth_service: AuthService = Depends(get_auth_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> SessionPrincipal:
    """
    Dependency resolving the caller's principal from cookie or bearer token.

    Raises:
        AuthenticationError: If no credentials are present or they are invalid
    """
    if session_token:
        principal = await auth_service.resolve_session(session_token)
        if principal is not None:
            return principal

    if credentials:
        platform = await auth_provider.validate_token(credentials.credentials)
        if platform is None:
            raise AuthenticationError(
                message="Invalid or expired token",
                error_code=ErrorCode.INVALID_TOKEN,
            )
        await auth_service.sync_platform_user(platform)
        return platform

    if session_token:
        raise AuthenticationError(
            message="Session expired",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    raise AuthenticationError(
        message="Authentication required",
        error_code=ErrorCode.UNAUTHORIZED,
    )


async def get_current_user(
    principal: Annotated[SessionPrincipal, Depends(get_session_principal)],
) -> AuthenticatedUser:
    """Dependency to get the current authenticated user."""
    return normalize_principal(principal)


# Type alias for convenience in route handlers
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
