"""Integration tests for seller profile endpoints."""

from datetime import datetime, timedelta
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities.seller_profile import SERVICE_CATEGORIES
from infrastructure.database.models import SellerProfileModel, UserModel
from tests.conftest import TEST_USER_ID, VALID_FIREBASE_TOKEN


def _profile_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "businessName": "Sharma Plumbing",
        "serviceCategory": "Plumbing",
        "description": "20+ years of experience fixing pipes and leaks reliably.",
        "contactNumber": "9876543210",
        "address": "12 MG Road, Mumbai, India",
        "experienceYears": 20,
        "serviceArea": "South Mumbai",
        "priceRange": "₹500-1000/hr",
    }
    payload.update(overrides)
    return payload


async def _seed_seller(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: str,
    business_name: str,
    *,
    status: str = "verified",
    category: str = "Plumbing",
    description: str = "Reliable local service with fair prices.",
    created_at: datetime | None = None,
) -> None:
    async with session_factory() as session:
        session.add(UserModel(id=user_id, email=f"{user_id}@example.com", role="seller"))
        session.add(
            SellerProfileModel(
                user_id=user_id,
                business_name=business_name,
                service_category=category,
                description=description,
                contact_number="9876543210",
                address="45 Park Street, Kolkata",
                experience_years=5,
                is_verified=status,
                rating=42,
                review_count=7,
                created_at=created_at or datetime.utcnow(),
            )
        )
        await session.commit()


class TestCreateSellerProfile:
    @pytest.mark.asyncio
    async def test_registers_pending_profile_and_promotes_user(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.post("/api/seller-profile", json=_profile_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == TEST_USER_ID
        assert data["businessName"] == "Sharma Plumbing"
        assert data["serviceArea"] == "South Mumbai"
        assert data["priceRange"] == "₹500-1000/hr"
        assert data["isVerified"] == "pending"
        assert data["rating"] == 0
        assert data["ratingAverage"] == 0.0
        assert data["reviewCount"] == 0

        me = await authenticated_client.get("/api/auth/user")
        assert me.json()["role"] == "seller"

    @pytest.mark.asyncio
    async def test_server_fields_in_body_are_ignored(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.post(
            "/api/seller-profile",
            json=_profile_payload(isVerified="verified", rating=50, userId="someone-else"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["isVerified"] == "pending"
        assert data["rating"] == 0
        assert data["userId"] == TEST_USER_ID

    @pytest.mark.asyncio
    async def test_second_registration_is_duplicate(
        self, authenticated_client: AsyncClient
    ) -> None:
        first = await authenticated_client.post("/api/seller-profile", json=_profile_payload())
        second = await authenticated_client.post(
            "/api/seller-profile", json=_profile_payload(businessName="Another Name")
        )

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["error_code"] == "DUPLICATE_SELLER_PROFILE"
        assert second.json()["message"] == "Seller profile already exists"

    @pytest.mark.asyncio
    async def test_duplicate_is_checked_before_validation(
        self, authenticated_client: AsyncClient
    ) -> None:
        await authenticated_client.post("/api/seller-profile", json=_profile_payload())

        response = await authenticated_client.post(
            "/api/seller-profile", json=_profile_payload(businessName="A")
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_SELLER_PROFILE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "field", "message"),
        [
            ({"businessName": "A"}, "businessName", "Business name must be at least 2 characters"),
            (
                {"description": "x" * 19},
                "description",
                "Description must be at least 20 characters",
            ),
            ({"contactNumber": "12345"}, "contactNumber", "Please enter a valid contact number"),
            ({"address": "Short"}, "address", "Address must be at least 10 characters"),
            ({"serviceCategory": ""}, "serviceCategory", "Please select a service category"),
            ({"experienceYears": -1}, "experienceYears", "Experience cannot be negative"),
            (
                {"experienceYears": 51},
                "experienceYears",
                "Please enter valid years of experience",
            ),
            ({"experienceYears": "20"}, "experienceYears", "Input should be a valid integer"),
            ({"experienceYears": True}, "experienceYears", "Input should be a valid integer"),
        ],
    )
    async def test_invalid_field_is_rejected(
        self,
        authenticated_client: AsyncClient,
        overrides: dict[str, Any],
        field: str,
        message: str,
    ) -> None:
        response = await authenticated_client.post(
            "/api/seller-profile", json=_profile_payload(**overrides)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["message"] == f'Validation error: {message} at "{field}"'

        # Nothing was written and the caller is still a buyer
        me = await authenticated_client.get("/api/seller-profile/me")
        assert me.status_code == 404
        user = await authenticated_client.get("/api/auth/user")
        assert user.json()["role"] == "buyer"

    @pytest.mark.asyncio
    async def test_missing_field_is_rejected(self, authenticated_client: AsyncClient) -> None:
        payload = _profile_payload()
        del payload["contactNumber"]

        response = await authenticated_client.post("/api/seller-profile", json=payload)

        assert response.status_code == 400
        assert 'at "contactNumber"' in response.json()["message"]

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.post("/api/seller-profile", json=_profile_payload())

        assert response.status_code == 401


class TestGetMySellerProfile:
    @pytest.mark.asyncio
    async def test_not_found_before_registration(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get("/api/seller-profile/me")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SELLER_PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_returns_own_pending_profile(self, authenticated_client: AsyncClient) -> None:
        created = await authenticated_client.post("/api/seller-profile", json=_profile_payload())

        response = await authenticated_client.get("/api/seller-profile/me")

        assert response.status_code == 200
        assert response.json()["id"] == created.json()["id"]
        assert response.json()["isVerified"] == "pending"


class TestListSellerProfiles:
    @pytest.mark.asyncio
    async def test_lists_only_verified_with_owner(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        await _seed_seller(session_factory, "seller-verified", "Kolkata Electricals")
        await _seed_seller(session_factory, "seller-pending", "Pending Plumbers", status="pending")
        await _seed_seller(session_factory, "seller-rejected", "Rejected Repairs", status="rejected")

        response = await client.get("/api/seller-profiles")

        assert response.status_code == 200
        data = response.json()
        assert [item["businessName"] for item in data] == ["Kolkata Electricals"]
        assert data[0]["user"]["id"] == "seller-verified"
        assert data[0]["user"]["role"] == "seller"
        assert data[0]["ratingAverage"] == 4.2

    @pytest.mark.asyncio
    async def test_ordered_by_creation_time(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        base = datetime(2026, 1, 1)
        await _seed_seller(session_factory, "seller-b", "Second Seller", created_at=base + timedelta(days=1))
        await _seed_seller(session_factory, "seller-a", "First Seller", created_at=base)

        response = await client.get("/api/seller-profiles")

        assert [item["businessName"] for item in response.json()] == [
            "First Seller",
            "Second Seller",
        ]

    @pytest.mark.asyncio
    async def test_filters_by_category_and_search(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        await _seed_seller(session_factory, "seller-1", "Pipe Masters", category="Plumbing")
        await _seed_seller(session_factory, "seller-2", "Bright Sparks", category="Electrical")
        await _seed_seller(
            session_factory,
            "seller-3",
            "Home Helpers",
            category="Plumbing",
            description="We fix leaking PIPES and taps across the city.",
        )

        by_category = await client.get("/api/seller-profiles", params={"category": "Electrical"})
        by_search = await client.get("/api/seller-profiles", params={"search": "pipe"})
        combined = await client.get(
            "/api/seller-profiles", params={"category": "Plumbing", "search": "home"}
        )

        assert [item["businessName"] for item in by_category.json()] == ["Bright Sparks"]
        assert {item["businessName"] for item in by_search.json()} == {
            "Pipe Masters",
            "Home Helpers",
        }
        assert [item["businessName"] for item in combined.json()] == ["Home Helpers"]

    @pytest.mark.asyncio
    async def test_empty_listing(self, client: AsyncClient) -> None:
        response = await client.get("/api/seller-profiles")

        assert response.status_code == 200
        assert response.json() == []


class TestServiceCategories:
    @pytest.mark.asyncio
    async def test_lists_fixed_categories(self, client: AsyncClient) -> None:
        response = await client.get("/api/service-categories")

        assert response.status_code == 200
        assert response.json() == list(SERVICE_CATEGORIES)
        assert "Plumbing" in response.json()


class TestSellerOnboardingFlow:
    @pytest.mark.asyncio
    async def test_login_register_and_get_verified(
        self,
        client: AsyncClient,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        login = await client.post("/api/auth/firebase", json={"token": VALID_FIREBASE_TOKEN})
        token = login.cookies.get("sid")
        client.cookies.clear()
        client.cookies.set("sid", token)
        user_id = login.json()["user"]["id"]

        created = await client.post("/api/seller-profile", json=_profile_payload())
        assert created.status_code == 201

        # Pending profiles are not listed
        assert (await client.get("/api/seller-profiles")).json() == []

        async with session_factory() as session:
            await session.execute(
                update(SellerProfileModel)
                .where(SellerProfileModel.user_id == user_id)
                .values(is_verified="verified")
            )
            await session.commit()

        listing = (await client.get("/api/seller-profiles")).json()
        assert len(listing) == 1
        assert listing[0]["businessName"] == "Sharma Plumbing"
        assert listing[0]["user"]["firstName"] == "Asha"
        assert listing[0]["user"]["role"] == "seller"
