"""Firebase ID token verification using the Firebase Admin SDK."""

import asyncio
from typing import Optional

import firebase_admin
import structlog
from firebase_admin import auth, credentials

from core.config import settings
from infrastructure.auth.provider import FirebaseIdentity

logger = structlog.get_logger()

FIREBASE_APP_NAME = "marketplace"


class FirebaseTokenVerifier:
    """Verifies Firebase ID tokens issued to the web client.

    The Admin SDK app is created lazily on first use so that importing
    this module never needs credentials.
    """

    def __init__(
        self,
        project_id: str = settings.firebase_project_id,
        credentials_path: str = settings.firebase_credentials_path,
        app_name: str = FIREBASE_APP_NAME,
    ) -> None:
        self._project_id = project_id
        self._credentials_path = credentials_path
        self._app_name = app_name
        self._app: Optional[firebase_admin.App] = None

    def _get_app(self) -> firebase_admin.App:
        """Return the Admin SDK app, initializing it once."""
        if self._app is not None:
            return self._app

        try:
            self._app = firebase_admin.get_app(self._app_name)
        except ValueError:
            credential = (
                credentials.Certificate(self._credentials_path)
                if self._credentials_path
                else None
            )
            options = {"projectId": self._project_id} if self._project_id else None
            self._app = firebase_admin.initialize_app(
                credential, options, name=self._app_name
            )
            logger.info("firebase_app_initialized", project_id=self._project_id or None)
        return self._app

    async def verify(self, token: str) -> Optional[FirebaseIdentity]:
        """Verify an ID token; None if it is malformed, invalid, expired or revoked.

        Certificate fetch failures and the SDK's ValueError for a missing
        project ID are not swallowed: they are server faults, not bad
        credentials.
        """
        if not token:
            return None

        app = self._get_app()
        try:
            # verify_id_token may fetch Google's public certs over the network
            claims = await asyncio.to_thread(auth.verify_id_token, token, app)
        except auth.InvalidIdTokenError as exc:
            logger.info("firebase_token_rejected", reason=type(exc).__name__)
            return None

        uid = claims.get("uid") or claims.get("sub")
        if not uid:
            return None

        return FirebaseIdentity(
            uid=uid,
            email=claims.get("email"),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
