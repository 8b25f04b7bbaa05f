# tests/conftest.py
"""
Shared fixtures: an app per storage backend, a client logged in as the demo user
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from Journal_app import create_app  # noqa: E402

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SESSION_TYPE': None,
    'RATELIMIT_ENABLED': False,
    'JOURNAL_TIMEZONE': 'UTC',
    'STORAGE_BACKEND': 'memory',
    'SEED_DEMO_USER': True,
    'ENABLE_METRICS': False,
    'LOG_LEVEL': 'WARNING',
}


def build_app(**overrides):
    config = dict(TEST_CONFIG)
    config.update(overrides)
    return create_app(config)


@pytest.fixture(params=['memory', 'sql'])
def app(request):
    """The app under each storage backend"""
    app = build_app(STORAGE_BACKEND=request.param)
    yield app


@pytest.fixture
def memory_app():
    return build_app()


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username='demo', password='demo'):
    return client.post('/api/login', json={'username': username, 'password': password})


def register(client, username, password='secret-pw', **extra):
    body = {'username': username, 'password': password}
    body.update(extra)
    return client.post('/api/register', json=body)


@pytest.fixture
def auth_client(client):
    response = login(client)
    assert response.status_code == 200
    return client


def trade_payload(**overrides):
    payload = {
        'symbol': 'aapl',
        'tradeType': 'long',
        'entryPrice': 100.0,
        'exitPrice': 110.0,
        'positionSize': 10,
        'entryDate': '2024-03-04T09:30:00Z',
        'exitDate': '2024-03-04T10:15:00Z',
        'fees': 1.0,
        'instrumentType': 'stocks',
        'setup': 'breakout',
        'riskRewardRatio': '1:2',
        'tags': ['momentum'],
        'notes': 'clean break of premarket high',
    }
    payload.update(overrides)
    return payload


def journal_payload(**overrides):
    payload = {
        'title': 'Monday review',
        'content': 'Stuck to the plan, sized down after the first loss.',
        'date': '2024-03-04T21:00:00Z',
        'mood': 'positive',
        'tags': ['discipline'],
    }
    payload.update(overrides)
    return payload
