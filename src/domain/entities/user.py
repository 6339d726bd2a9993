"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4


class UserRole(StrEnum):
    """Marketplace role of a user."""

    BUYER = "buyer"
    SELLER = "seller"


@dataclass
class User:
    """Domain entity for a marketplace user."""

    id: str = field(default_factory=lambda: str(uuid4()))
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole = UserRole.BUYER
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @staticmethod
    def split_display_name(display_name: str | None) -> tuple[str | None, str | None]:
        """Split "First Rest Of Name" on the first whitespace run."""
        if not display_name or not display_name.strip():
            return None, None
        parts = display_name.strip().split(maxsplit=1)
        first = parts[0]
        last = parts[1] if len(parts) > 1 else None
        return first, last
