"""Authentication API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import CurrentUser, bearer_scheme, session_cookie
from api.dependencies.services import get_auth_service, get_user_service
from api.schemas.auth import FirebaseLoginRequest, FirebaseLoginResponse
from api.schemas.common import ErrorResponse
from api.schemas.user import UserResponse
from core.config import settings
from core.exceptions import MissingTokenError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/firebase",
    response_model=FirebaseLoginResponse,
    summary="Exchange a Firebase ID token for a session",
    responses={
        200: {"description": "Session established"},
        400: {"model": ErrorResponse, "description": "Token missing"},
        401: {"model": ErrorResponse, "description": "Token invalid or expired"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def firebase_login(
    request: Request,
    response: Response,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(bearer_scheme),
    ],
    body: FirebaseLoginRequest | None = None,
    service: AuthService = Depends(get_auth_service),
) -> FirebaseLoginResponse:
    """
    Verify a Firebase ID token, upsert the user and start a session.

    The token may be sent as `{"token": "..."}` or as a bearer header.
    The session cookie is HttpOnly and lasts 7 days.
    """
    token = (body.token if body else None) or (credentials.credentials if credentials else None)
    if not token:
        raise MissingTokenError()

    user, session_token = await service.login_with_firebase(token)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return FirebaseLoginResponse(success=True, user=UserResponse.from_entity(user))


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End the current session",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def logout(
    request: Request,
    response: Response,
    session_token: Annotated[str | None, Depends(session_cookie)],
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Delete the server-side session, if any, and clear the cookie."""
    if session_token:
        await service.logout(session_token)
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return None


@router.get(
    "/user",
    response_model=UserResponse,
    summary="Get the current user",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "No user row for this identity"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_auth_user(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the caller's user record, including their role."""
    record = await service.get(user.id)
    return UserResponse.from_entity(record)
