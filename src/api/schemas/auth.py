"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel

from api.schemas.user import UserResponse


class FirebaseLoginRequest(BaseModel):
    """Firebase ID token obtained by the client SDK."""

    token: str | None = None


class FirebaseLoginResponse(BaseModel):
    """Result of a successful token exchange."""

    success: bool
    user: UserResponse
