"""
Pytest configuration and fixtures
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('TEAMSTOCK_LOG_TO_FILE', 'false')
os.environ.setdefault('TEAMSTOCK_LOG_LEVEL', 'WARNING')

from datetime import datetime, timedelta

import pytest

from teamstock import create_app
from teamstock.config import SystemConfig
from teamstock.data.repositories import build_repositories
from teamstock.data.store import MemoryBlobStore


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'STORE_BACKEND': 'mock',
    'MOCK_STORE_PATH': None,
    'SYSTEM_CONFIG_PATH': None,
    'RATELIMIT_ENABLED': False,
}


class FrozenClock:
    """Clock that only moves when told to"""

    def __init__(self, now=None):
        self.now = now or datetime(2026, 10, 19, 9, 30)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope='function')
def app():
    """Flask application with an in-memory database and mock store"""
    return create_app(TEST_CONFIG)


@pytest.fixture(scope='function')
def app_context(app):
    """Pushed application context, for code that reads current_app"""
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def auth_headers(client):
    """Bearer token headers for a freshly registered user"""
    response = client.post('/api/auth/register', json={
        'username': 'tester',
        'password': 'correct-horse-battery',
        'team': 'Avionics',
    })
    assert response.status_code == 201
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def config():
    return SystemConfig()


@pytest.fixture
def store():
    return MemoryBlobStore()


@pytest.fixture
def repositories(store, clock):
    return build_repositories(store, clock=clock)
