"""Unit tests for the session lifecycle: signup, login, resume, logout."""
import pytest

from database import SESSION_KEY
from models.internal import CompanyProfile, Lead
from services.errors import (
    DuplicateAccount,
    EmptySelection,
    InvalidCredentials,
    MissingProfileName,
    NotAuthenticated,
)
from services.session import SessionManager
from services.profile_store import ProfileStore
from tests.helpers import WriteFailingStore


class TestLogin:
    def test_signup_logs_in_and_persists_marker(self, session, marker_store):
        assert session.signup("a@x.com", "secret1") == "a@x.com"
        assert session.is_logged_in
        assert marker_store.get(SESSION_KEY) == "a@x.com"

    def test_signup_then_login_with_different_casing(self, session):
        """signup -> logout -> login with messy casing resolves to the same account."""
        session.signup("a@x.com", "secret1")
        session.logout()
        assert session.login("A@X.com ", " secret1") == "a@x.com"
        assert session.current_user == "a@x.com"

    def test_duplicate_signup_stays_logged_out(self, session):
        session.signup("a@x.com", "secret1")
        session.logout()
        with pytest.raises(DuplicateAccount):
            session.signup("A@x.com", "other12")
        assert not session.is_logged_in

    def test_bad_credentials(self, session):
        session.signup("a@x.com", "secret1")
        session.logout()
        with pytest.raises(InvalidCredentials):
            session.login("a@x.com", "wrong")
        with pytest.raises(InvalidCredentials):
            session.login("ghost@x.com", "secret1")
        assert not session.is_logged_in

    def test_marker_write_failure_still_logs_in(self, accounts, profile_store):
        session = SessionManager(accounts, profile_store, WriteFailingStore())
        session.signup("a@x.com", "secret1")
        session.logout()
        assert session.login("a@x.com", "secret1") == "a@x.com"
        assert session.is_logged_in


class TestResume:
    def test_marker_resumes_with_profiles_loaded(self, accounts, profile_store, marker_store, company_profile):
        first = SessionManager(accounts, profile_store, marker_store)
        first.signup("a@x.com", "secret1")
        first.save_profile("Boutiques", company_profile)

        resumed = SessionManager(accounts, profile_store, marker_store)
        assert resumed.current_user == "a@x.com"
        assert [p.name for p in resumed.profiles] == ["Boutiques"]

    def test_no_marker_means_logged_out(self, session):
        assert session.current_user is None
        assert session.profiles == []


class TestLogout:
    def test_logout_clears_everything(self, session, marker_store, company_profile):
        session.signup("a@x.com", "secret1")
        session.save_profile("Boutiques", company_profile)
        session.leads = [Lead()]
        session.logout()
        assert session.current_user is None
        assert session.profiles == []
        assert session.leads == []
        assert marker_store.get(SESSION_KEY) is None

    def test_login_and_logout_bump_generation(self, session):
        start = session.generation
        session.signup("a@x.com", "secret1")
        after_signup = session.generation
        session.logout()
        assert start < after_signup < session.generation

    def test_next_user_never_sees_previous_profiles(self, session, company_profile):
        session.signup("a@x.com", "secret1")
        session.save_profile("A's profile", company_profile)
        session.logout()
        session.signup("b@x.com", "secret2")
        assert session.profiles == []
        session.save_profile("B's profile", company_profile)
        session.logout()
        session.login("a@x.com", "secret1")
        assert [p.name for p in session.profiles] == ["A's profile"]


class TestProfiles:
    def test_save_requires_login(self, session, company_profile):
        with pytest.raises(NotAuthenticated):
            session.save_profile("x", company_profile)

    def test_save_rejects_blank_name(self, session, company_profile):
        session.signup("a@x.com", "secret1")
        with pytest.raises(MissingProfileName):
            session.save_profile("   ", company_profile)
        assert session.profiles == []

    def test_save_appends_and_persists(self, session, profile_store, company_profile):
        session.signup("a@x.com", "secret1")
        first = session.save_profile("One", company_profile)
        second = session.save_profile("Two", CompanyProfile(sector="Health"))
        assert first.id != second.id
        assert [p.name for p in session.profiles] == ["One", "Two"]
        assert [p.id for p in profile_store.list_for("a@x.com")] == [first.id, second.id]

    def test_select_uses_saved_order(self, session, company_profile):
        session.signup("a@x.com", "secret1")
        one = session.save_profile("One", company_profile)
        two = session.save_profile("Two", company_profile)
        selected = session.select_profiles([two.id, one.id, "unknown"])
        assert [p.name for p in selected] == ["One", "Two"]

    def test_empty_selection(self, session, company_profile):
        session.signup("a@x.com", "secret1")
        session.save_profile("One", company_profile)
        with pytest.raises(EmptySelection):
            session.select_profiles([])

    def test_save_survives_profile_write_failure(self, accounts, marker_store, company_profile):
        """A failed write is logged; the in-memory list still has the new profile."""
        session = SessionManager(accounts, ProfileStore(WriteFailingStore()), marker_store)
        session.signup("a@x.com", "secret1")
        saved = session.save_profile("Boutiques", company_profile)
        assert session.profiles == [saved]
