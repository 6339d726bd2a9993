"""Dependency injection factories for services."""

from datetime import timedelta
from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.auth_service import AuthService
from domain.services.seller_profile_service import SellerProfileService
from domain.services.user_service import UserService
from infrastructure.auth.firebase_provider import FirebaseTokenVerifier
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_user_service() -> UserService:
    """Get User service instance."""
    return UserService(get_uow_factory())


@lru_cache
def get_seller_profile_service() -> SellerProfileService:
    """Get SellerProfile service instance."""
    return SellerProfileService(get_uow_factory())


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(
        get_uow_factory(),
        identity_verifier=FirebaseTokenVerifier(),
        session_ttl=timedelta(days=settings.session_ttl_days),
    )
