from typing import Dict, List
from database import KeyValueStore, USER_DATA_KEY
from models.internal import SavedProfile
from services.account_store import normalize_email
from services.errors import StorageError
from pydantic import ValidationError as PydanticValidationError
import logging

logger = logging.getLogger(__name__)


class ProfileStore:
    """Per-user ordered lists of saved profiles, all under one document."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def _load_all(self) -> Dict[str, list]:
        try:
            data = self._kv.get(USER_DATA_KEY)
        except StorageError as e:
            logger.error(f"Failed to load user data: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _validated(self, email: str, raw: list) -> List[SavedProfile]:
        profiles = []
        for item in raw:
            try:
                profiles.append(SavedProfile.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping unreadable saved profile for {email}: {e}")
        return profiles

    def list_for(self, email: str) -> List[SavedProfile]:
        key = normalize_email(email)
        return self._validated(key, self._load_all().get(key) or [])

    def append(self, email: str, profile: SavedProfile) -> List[SavedProfile]:
        """Add to the end of the user's stored list and persist it.

        Stored records are kept as-is, including ones that no longer validate.
        """
        key = normalize_email(email)
        all_data = self._load_all()
        stored = all_data.get(key)
        raw = list(stored) if isinstance(stored, list) else []
        raw.append(profile.model_dump(by_alias=True, mode="json"))
        all_data[key] = raw
        try:
            self._kv.set(USER_DATA_KEY, all_data)
        except StorageError as e:
            logger.error(f"Failed to save user data: {e}")
        return self._validated(key, raw)
