"""Shared pytest fixtures and configuration."""

import os

# The module-level app in realty_crm.main reads settings at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient

from realty_crm.core.config import Settings
from realty_crm.core.security import create_access_token, get_password_hash
from realty_crm.main import create_app
from realty_crm.models.user import User, UserRole

TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite://",
    SECRET_KEY="test-secret",
    LOG_FORMAT="text",
    LOG_LEVEL="WARNING",
)

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash():
    """One bcrypt hash shared by all fixture users (hashing is slow)."""
    return get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture
def app():
    return create_app(TEST_SETTINGS)


@pytest.fixture
def client(app):
    """Test client with the lifespan running (fresh in-memory database)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(client):
    return client.app.state.session_factory


@pytest.fixture
def make_user(session_factory, password_hash):
    """Factory that inserts a user and returns it detached."""
    counter = {"n": 0}

    def _make_user(role=UserRole.AGENT, name=None, email=None, is_active=True):
        counter["n"] += 1
        n = counter["n"]
        with session_factory() as db:
            user = User(
                name=name or f"{role.value.title()} {n}",
                email=email or f"{role.value}{n}@example.com",
                hashed_password=password_hash,
                role=role.value,
                is_active=is_active,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            db.expunge(user)
        return user

    return _make_user


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, config=TEST_SETTINGS)}"}


@pytest.fixture
def agent(make_user):
    return make_user(UserRole.AGENT, name="Alice Agent", email="alice@example.com")


@pytest.fixture
def other_agent(make_user):
    return make_user(UserRole.AGENT, name="Bob Agent", email="bob@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, name="Ada Admin", email="ada@example.com")


@pytest.fixture
def plain_user(make_user):
    return make_user(UserRole.USER, name="Uma User", email="uma@example.com")


@pytest.fixture
def agent_headers(agent):
    return bearer(agent)


@pytest.fixture
def other_agent_headers(other_agent):
    return bearer(other_agent)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def user_headers(plain_user):
    return bearer(plain_user)


@pytest.fixture
def property_payload():
    return {
        "title": "Sunny family home",
        "description": "Three bedrooms close to the park",
        "type": "residential",
        "price": 150000,
        "address": {
            "street": "12 Elm Street",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
        },
        "features": {"bedrooms": 3, "bathrooms": 2, "square_feet": 1800},
        "amenities": ["garden"],
    }


@pytest.fixture
def client_payload():
    return {
        "name": "Carol Client",
        "email": "Carol@Example.com",
        "phone": "555-0100",
        "type": "buyer",
        "preferences": {"property_types": ["residential"], "min_price": 100000, "max_price": 300000},
    }


@pytest.fixture
def lead_payload():
    return {
        "name": "Larry Lead",
        "email": "larry@example.com",
        "phone": "555-0199",
        "source": "referral",
        "type": "seller",
        "preferences": {"min_price": 200000, "locations": [{"city": "Springfield", "state": "IL"}]},
    }


@pytest.fixture
def headers_for():
    """Build an Authorization header for any user."""
    return bearer


@pytest.fixture
def test_settings():
    return TEST_SETTINGS


@pytest.fixture
def default_password():
    return DEFAULT_PASSWORD
