"""
Process-wide session: who is logged in, their saved profiles, and the leads
from their latest search.

Construct once per process and hand the same instance to every consumer.
A persisted session marker is resumed on construction, so a restart looks
exactly like a fresh login to everything downstream.
"""
from datetime import datetime, timezone
from typing import List, Optional
from database import KeyValueStore, SESSION_KEY
from models.internal import CompanyProfile, Lead, SavedProfile
from services.account_store import AccountStore, normalize_email
from services.profile_store import ProfileStore
from services.errors import (
    EmptySelection,
    InvalidCredentials,
    MissingProfileName,
    NotAuthenticated,
    StorageError,
)
import logging

logger = logging.getLogger(__name__)


def _new_profile_id() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


class SessionManager:
    def __init__(
        self,
        accounts: AccountStore,
        profiles: ProfileStore,
        marker_store: KeyValueStore,
    ):
        self.accounts = accounts
        self.profile_store = profiles
        self._marker = marker_store
        self.current_user: Optional[str] = None
        self.profiles: List[SavedProfile] = []
        self.leads: List[Lead] = []
        # Bumped on every login and logout; results tagged with an older value are dropped.
        self.generation = 0
        self._resume()

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    def _resume(self) -> None:
        try:
            email = self._marker.get(SESSION_KEY)
        except StorageError as e:
            logger.error(f"Failed to read session marker: {e}")
            return
        if isinstance(email, str) and email:
            self._enter(email)
            logger.info(f"Resumed session for {self.current_user}")

    def _enter(self, email: str) -> None:
        # Profiles are hydrated before the session is visible as logged in.
        user = normalize_email(email)
        self.profiles = self.profile_store.list_for(user)
        self.leads = []
        self.generation += 1
        self.current_user = user

    def _persist_marker(self, email: str) -> None:
        try:
            self._marker.set(SESSION_KEY, email)
        except StorageError as e:
            logger.error(f"Failed to save session marker: {e}")

    def login(self, email: str, password: str) -> str:
        user = normalize_email(email)
        if not self.accounts.verify(user, password):
            logger.info(f"Login rejected for {user}")
            raise InvalidCredentials()
        self._enter(user)
        self._persist_marker(user)
        logger.info(f"User logged in: {user} ({len(self.profiles)} saved profiles)")
        return user

    def signup(self, email: str, password: str) -> str:
        user = self.accounts.create(email, password)
        self._enter(user)
        self._persist_marker(user)
        logger.info(f"User signed up and logged in: {user}")
        return user

    def logout(self) -> None:
        try:
            self._marker.delete(SESSION_KEY)
        except StorageError as e:
            logger.error(f"Failed to clear session marker: {e}")
        if self.current_user:
            logger.info(f"User logged out: {self.current_user}")
        self.current_user = None
        self.profiles = []
        self.leads = []
        self.generation += 1

    def require_user(self) -> str:
        if self.current_user is None:
            raise NotAuthenticated()
        return self.current_user

    def save_profile(self, name: str, profile: CompanyProfile) -> SavedProfile:
        user = self.require_user()
        if not name or not name.strip():
            raise MissingProfileName()
        profile_id = _new_profile_id()
        if any(p.id == profile_id for p in self.profiles):
            profile_id = f"{profile_id}-{len(self.profiles)}"
        saved = SavedProfile(id=profile_id, name=name, profile=profile)
        self.profiles = self.profiles + [saved]
        self.profile_store.append(user, saved)
        logger.info(f"Profile saved for {user}: '{name}' ({saved.id})")
        return saved

    def select_profiles(self, profile_ids: List[str]) -> List[SavedProfile]:
        """Saved profiles whose id was selected, in saved order."""
        self.require_user()
        wanted = set(profile_ids or [])
        selected = [p for p in self.profiles if p.id in wanted]
        if not selected:
            raise EmptySelection()
        return selected
