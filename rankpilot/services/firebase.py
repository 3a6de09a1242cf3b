"""
RankPilot — Firebase bridge.

Verifies Firebase Auth ID tokens and mirrors activity records into the
Realtime Database for the live activity feed.
Requires firebase-admin SDK and a service account key.
"""

import logging

import firebase_admin
from firebase_admin import auth as firebase_auth, credentials, db as firebase_db

logger = logging.getLogger(__name__)


class FirebaseBridge:
    """Owns one firebase-admin app. Every call is a no-op until ``init`` succeeds."""

    def __init__(self):
        self._app: firebase_admin.App | None = None

    def init(self, cred_path: str = "", db_url: str = "") -> bool:
        """
        Initialize Firebase Admin SDK.

        Args:
            cred_path: Path to the service account JSON key file.
            db_url: Firebase RTDB URL (activity feed disabled if blank).

        Returns True if init succeeded, False otherwise.
        """
        if self._app is not None:
            return True

        if not cred_path:
            logger.warning("FIREBASE_CRED_PATH not set — Firebase bridge disabled")
            return False

        options = {"databaseURL": db_url} if db_url else {}
        try:
            cred = credentials.Certificate(cred_path)
            self._app = firebase_admin.initialize_app(cred, options, name="rankpilot")
            logger.info("✅ Firebase Admin SDK initialized")
            return True
        except Exception as e:
            logger.error("Firebase init failed: %s", e)
            return False

    @property
    def initialized(self) -> bool:
        return self._app is not None

    @property
    def has_database(self) -> bool:
        return self._app is not None and bool(self._app.options.get("databaseURL"))

    def verify_id_token(self, id_token: str) -> dict:
        """Decode a Firebase ID token. Raises ValueError when unusable."""
        if self._app is None:
            raise ValueError("Firebase is not initialized — cannot verify ID tokens")
        try:
            return firebase_auth.verify_id_token(id_token, app=self._app)
        except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError) as e:
            raise ValueError(str(e)) from e

    def sync_activity(self, user_id: str, activity_data: dict) -> bool:
        """Push an activity to ``activities/{user_id}/{id}`` for the realtime feed."""
        if not self.has_database:
            return False
        try:
            entry_id = activity_data.get("id", "unknown")
            firebase_db.reference(
                f"activities/{user_id}/{entry_id}", app=self._app
            ).set(activity_data)
            return True
        except Exception as e:
            logger.error("Firebase sync_activity failed: %s", e)
            return False

    def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
