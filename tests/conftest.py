"""Shared test fixtures and helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from nrfdesk.admin_users.store import InMemoryAdminUserStore
from nrfdesk.auth.hashing import hash_secret
from nrfdesk.core.config import AuthConfig, Settings
from nrfdesk.exhibitors.models import ExhibitorRecord
from nrfdesk.exhibitors.store import InMemoryExhibitorStore

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_ROUNDS = 4

ADMIN_EMAIL = "real@x.com"
ADMIN_PASSWORD = "correct-horse"

ADMIN_TOKEN = "test-admin-token-for-tests"


def install_admin_token(app) -> str:
    """Register an admin session token on the app's auth provider.

    Returns the token string for use in Authorization headers.
    """
    provider = app.state.auth_provider
    provider._tokens[ADMIN_TOKEN] = {
        "user_id": "test-admin",
        "email": "test-admin@x.com",
        "expires_at": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    return ADMIN_TOKEN


def sample_exhibitors() -> list[ExhibitorRecord]:
    return [
        ExhibitorRecord(
            name="Acme Apparel SARL",
            address="10 Rue de Paris FRANCE",
            country="FRANCE",
            company_info="clothing manufacturer",
            crawled_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        ),
        ExhibitorRecord(
            name="Generic Hardware Co",
            country="Germany",
            address="Berlin GERMANY",
            company_info="industrial tools",
            crawled_at=datetime(2025, 3, 2, tzinfo=timezone.utc),
        ),
        ExhibitorRecord(
            name="ShipFast",
            country="NETHERLANDS",
            address="Amsterdam NETHERLANDS",
            company_info="Warehouse and shipping for online stores",
            crawled_at=datetime(2025, 3, 3, tzinfo=timezone.utc),
        ),
        ExhibitorRecord(
            name="Casa Mobili",
            country="ITALY",
            company_info="Furniture and interior decoration",
            crawled_at=datetime(2025, 3, 4, tzinfo=timezone.utc),
        ),
        ExhibitorRecord(
            name="Kiosko Systems",
            country="SPAIN",
            company_info="Self-service kiosk manufacturer",
            crawled_at=datetime(2025, 3, 5, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(auth=AuthConfig(bcrypt_rounds=TEST_ROUNDS))


@pytest.fixture
def admin_store() -> InMemoryAdminUserStore:
    store = InMemoryAdminUserStore()
    store.create(ADMIN_EMAIL, hash_secret(ADMIN_PASSWORD, rounds=TEST_ROUNDS))
    return store


@pytest.fixture
def exhibitor_store() -> InMemoryExhibitorStore:
    return InMemoryExhibitorStore(sample_exhibitors())
