"""
Credential records keyed by normalized email.

Passwords are stored and compared as plaintext. This mirrors the behaviour of
the local-only app this service replaces; hash them before exposing the
service to anyone but its owner.
"""
from typing import Dict
from database import KeyValueStore, USERS_KEY
from services.errors import DuplicateAccount, StorageError
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountStore:
    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def _load(self) -> Dict[str, dict]:
        try:
            users = self._kv.get(USERS_KEY)
        except StorageError as e:
            logger.error(f"Failed to load accounts: {e}")
            return {}
        return users if isinstance(users, dict) else {}

    def _save(self, users: Dict[str, dict]) -> None:
        try:
            self._kv.set(USERS_KEY, users)
        except StorageError as e:
            logger.error(f"Failed to save accounts: {e}")

    def exists(self, email: str) -> bool:
        return normalize_email(email) in self._load()

    def create(self, email: str, password: str) -> str:
        """Persist a new credential. Returns the normalized email."""
        key = normalize_email(email)
        users = self._load()
        if key in users:
            raise DuplicateAccount(key)
        users[key] = {"password": password.strip()}
        self._save(users)
        logger.info(f"Account created: {key}")
        return key

    def verify(self, email: str, password: str) -> bool:
        # Unknown email and wrong password are reported the same way.
        # Surrounding whitespace is not part of a password.
        record = self._load().get(normalize_email(email))
        if not isinstance(record, dict):
            return False
        return record.get("password") == password.strip()
