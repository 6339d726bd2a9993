"""Pydantic schemas for User API."""

from datetime import datetime

from pydantic import ConfigDict

from api.schemas.common import CamelModel
from domain.entities.user import User, UserRole


class UserResponse(CamelModel):
    """Schema for User response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "kX9fQ2uVbKc1",
                "email": "asha@example.com",
                "firstName": "Asha",
                "lastName": "Sharma",
                "profileImageUrl": None,
                "role": "buyer",
                "createdAt": "2026-01-28T10:00:00",
                "updatedAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)
