"""Shared fixtures: in-memory stores, a session and a sample profile."""
import pytest

from database import MemoryKeyValueStore
from models.internal import CompanyProfile, EmailApproach
from services.account_store import AccountStore
from services.profile_store import ProfileStore
from services.session import SessionManager


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def accounts(kv):
    return AccountStore(kv)


@pytest.fixture
def profile_store(kv):
    return ProfileStore(kv)


@pytest.fixture
def marker_store():
    return MemoryKeyValueStore()


@pytest.fixture
def session(accounts, profile_store, marker_store):
    return SessionManager(accounts, profile_store, marker_store)


@pytest.fixture
def company_profile():
    return CompanyProfile(
        sector="Conversational AI",
        size="Small",
        core_solution="WhatsApp sales agents",
        icp="Independent clothing stores",
        channels="WhatsApp, Instagram",
        country="Brazil",
        target_audience="Boutiques in Sao Paulo",
        email_approach=EmailApproach.PROFESSIONAL,
    )
