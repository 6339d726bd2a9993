"""JWT authentication provider for platform-issued bearer tokens.

Supports tokens signed by the hosting platform (ES256 via JWKS) and
locally-created tokens (HS256, used by tests and internal tooling).

Expected payload:
    {
        "sub": "user-id",
        "email": "user@example.com",
        "user_metadata": { "display_name": "Asha Sharma" },
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from domain.entities.session import PlatformSession

logger = logging.getLogger(__name__)

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache the platform's JWKS keys."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.platform_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
            # Build a kid -> key mapping
            _jwks_cache = {}
            for key_data in jwks_data.get("keys", []):
                kid = key_data.get("kid")
                if kid:
                    _jwks_cache[kid] = key_data
            logger.info("Fetched %d JWKS keys", len(_jwks_cache))
            return _jwks_cache
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}


def _timestamp(value: Any) -> Optional[datetime]:
    """Convert a numeric JWT time claim to a naive UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc).replace(tzinfo=None)


class JWTAuthProvider:
    """JWT-based authentication provider.

    Handles validation of both platform-issued (ES256) and
    locally-created (HS256) JWTs.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[PlatformSession]:
        """
        Validate a JWT and extract the principal.

        Detects the signing algorithm from the token header:
        - ES256 (platform): validates via JWKS public key
        - anything else: validates via shared secret

        Args:
            token: The JWT to validate

        Returns:
            PlatformSession if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg == "ES256":
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )

            if payload is None:
                return None

            subject = payload.get("sub")
            if not subject:
                return None

            user_metadata = payload.get("user_metadata") or {}
            display_name = (
                user_metadata.get("display_name")
                or user_metadata.get("name")
                or user_metadata.get("full_name")
                or payload.get("name")
            )

            expires_at = _timestamp(payload.get("exp"))
            issued_at = _timestamp(payload.get("iat"))
            if expires_at is None:
                expires_at = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
            if issued_at is None:
                issued_at = datetime.utcnow()

            return PlatformSession(
                subject=str(subject),
                email=payload.get("email"),
                display_name=display_name,
                issued_at=issued_at,
                expires_at=expires_at,
            )

        except JWTError:
            return None

    async def _validate_es256(
        self, token: str, header: dict
    ) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Unknown kid: the platform may have rotated keys, refetch once
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, principal: PlatformSession) -> str:
        """
        Create an HS256 JWT for a principal.

        Args:
            principal: The identity to encode

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        expire = now + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": principal.subject,
            "email": principal.email,
            "iat": now,
            "exp": expire,
            "user_metadata": {
                "display_name": principal.display_name,
            },
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
