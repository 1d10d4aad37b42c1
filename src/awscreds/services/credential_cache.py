""" Credential Cache: single-writer, many-reader cell holding the latest published credentials. """
import threading
from typing import Optional

from botocore.credentials import Credentials

from ..models.credentials import CachedCredentials


class CredentialCache:
    """
    Holds the most recently published CachedCredentials snapshot.

    Readers never lock: publishing swaps one reference to an immutable
    snapshot, so a reader sees either the previous or the next snapshot in
    full. The lock only orders writers so that versions stay sequential.
    """

    def __init__(self):
        self._current: Optional[CachedCredentials] = None
        self._write_lock = threading.Lock()

    def load(self) -> Optional[CachedCredentials]:
        """Return the current snapshot, or None before the first publish."""
        return self._current

    def publish(self, credentials: Credentials) -> CachedCredentials:
        with self._write_lock:
            previous = self._current
            snapshot = CachedCredentials(
                credentials=credentials,
                version=previous.version + 1 if previous else 1,
            )
            self._current = snapshot
        return snapshot
