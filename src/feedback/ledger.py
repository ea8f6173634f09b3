"""Notification ledger: remembers which feedback documents were already notified."""

import threading
from typing import Optional, Set

from google.api_core.exceptions import AlreadyExists, NotFound

from src.config.settings import Settings
from src.lib.exceptions import ConfigurationException


class NotificationLedger:
    """Claim-once registry keyed by feedback document path."""

    def claim(self, key: str) -> bool:
        """Return True if this call is the first to claim the key."""
        raise NotImplementedError

    def release(self, key: str) -> None:
        """Forget a claim so a redelivered event can try again."""
        raise NotImplementedError


class NullLedger(NotificationLedger):
    """Accepts at-least-once delivery: every claim succeeds."""

    def claim(self, key: str) -> bool:
        return True

    def release(self, key: str) -> None:
        pass


class InMemoryLedger(NotificationLedger):
    """Process-local ledger for local runs and tests."""

    def __init__(self):
        self._claimed: Set[str] = set()
        self._lock = threading.Lock()

    def claim(self, key: str) -> bool:
        with self._lock:
            if key in self._claimed:
                return False
            self._claimed.add(key)
            return True

    def release(self, key: str) -> None:
        with self._lock:
            self._claimed.discard(key)


class FirestoreLedger(NotificationLedger):
    """
    Ledger backed by marker documents in Firestore.

    create() fails with AlreadyExists when the marker is present, which makes
    the claim atomic across instances.
    """

    def __init__(self, client=None, collection: Optional[str] = None):
        if client is None:
            from firebase_admin import firestore
            from src.feedback.auth import get_firebase_app
            client = firestore.client(app=get_firebase_app())
        self.client = client
        self.collection = collection or Settings.NOTIFICATION_LEDGER_COLLECTION

    def _doc_id(self, key: str) -> str:
        # Firestore document ids cannot contain "/"
        return key.replace("/", "__")

    def claim(self, key: str) -> bool:
        ref = self.client.collection(self.collection).document(self._doc_id(key))
        try:
            ref.create({"key": key})
        except AlreadyExists:
            return False
        return True

    def release(self, key: str) -> None:
        ref = self.client.collection(self.collection).document(self._doc_id(key))
        try:
            ref.delete()
        except NotFound:
            pass


def create_ledger(backend: Optional[str] = None) -> NotificationLedger:
    """
    Build the ledger named by FEEDBACK_LEDGER.

    Raises:
        ConfigurationException: If the backend name is unknown
    """
    backend = (backend or Settings.FEEDBACK_LEDGER).lower()
    if backend == "firestore":
        return FirestoreLedger()
    if backend == "memory":
        return InMemoryLedger()
    if backend == "none":
        return NullLedger()
    raise ConfigurationException(
        f"Unknown FEEDBACK_LEDGER backend: {backend}",
        details={"allowed": "firestore, memory, none"}
    )
