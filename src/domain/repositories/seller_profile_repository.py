"""Seller profile repository protocol."""

from typing import Protocol

from domain.entities.seller_profile import SellerProfile, SellerProfileWithUser


class ISellerProfileRepository(Protocol):
    """Repository interface for SellerProfile entities."""

    async def create(self, profile: SellerProfile) -> SellerProfile:
        """Create a new seller profile.

        Raises IntegrityError if the user already owns a profile.
        """
        ...

    async def get_by_user_id(self, user_id: str) -> SellerProfile | None:
        """Get the profile owned by a user."""
        ...

    async def list_verified(
        self,
        category: str | None = None,
        search: str | None = None,
    ) -> list[SellerProfileWithUser]:
        """List verified profiles with their owners, oldest first."""
        ...
