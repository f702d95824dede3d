"""Pytest configuration and fixtures.

Every test gets a fresh in-memory data service seeded with one user per
role, a Flask app in testing config wired to it, and a test client.
"""

import pytest

from sponsorapp import create_app
from sponsorapp.auth import load_caller
from sponsorapp.invalidation import views_invalidated

from fakes import MemoryDataService


# --- Data service ---


@pytest.fixture
def backend():
    service = MemoryDataService()
    service.admin_id = service.add_user('admin@example.com', role='admin')
    service.manager_id = service.add_user('manager@example.com', role='manager')
    service.member_id = service.add_user('member@example.com', role='user')
    service.pending_id = service.add_user('pending@example.com', role='user', is_approved=False)
    return service


@pytest.fixture
def caller_for(backend):
    """Build the Caller for a seeded user id."""
    def build(user_id):
        return load_caller(backend, backend.get_identity(user_id))
    return build


@pytest.fixture
def admin(backend, caller_for):
    return caller_for(backend.admin_id)


@pytest.fixture
def manager(backend, caller_for):
    return caller_for(backend.manager_id)


@pytest.fixture
def member(backend, caller_for):
    return caller_for(backend.member_id)


@pytest.fixture
def pending(backend, caller_for):
    return caller_for(backend.pending_id)


# --- Sample rows ---


@pytest.fixture
def tier(backend):
    return backend.insert('tiers', {'name': 'Gold', 'level': 1, 'description': None})


@pytest.fixture
def sponsor(backend, tier):
    return backend.insert('sponsors', {'name': 'Acme Corp', 'tier_id': tier['id'], 'fulfilled': False})


@pytest.fixture
def event(backend):
    return backend.insert('events', {'title': 'Spring Gala', 'date': '2025-04-12', 'details': None})


# --- Flask ---


@pytest.fixture
def app(backend):
    return create_app('testing', backend=backend)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a user id in the session, as a successful sign-in does."""
    def log_in(user_id):
        with client.session_transaction() as sess:
            sess['user_id'] = user_id
        return client
    return log_in


# --- Invalidation ---


@pytest.fixture
def invalidated():
    paths = []

    def record(path):
        paths.append(path)

    views_invalidated.connect(record)
    yield paths
    views_invalidated.disconnect(record)
