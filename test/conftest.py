"""
Test Configuration and Fixtures

This module provides:
- Test environment (SQLite database file, log directory) set before app imports
- Table cleanup for integration tests
- A session-scoped TestClient plus user/token helpers

Architecture:
- Unit tests (@pytest.mark.unit): mocked collaborators, no database
- Integration tests: the real app against a SQLite file database
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read once at import time by stagepass.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_db_dir = Path(tempfile.mkdtemp(prefix='stagepass_test_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{test_db_dir / "stagepass_test.db"}'
    os.environ['SECRET_KEY'] = 'stagepass_test_secret_key'
    os.environ['DEBUG'] = 'false'
    os.environ['MAX_TICKETS_PER_RESERVATION'] = '10'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, text  # noqa: E402

from stagepass.platform.config.core_setting import settings  # noqa: E402


TABLES_IN_DELETE_ORDER = ['reservation', 'concert', 'venue', 'user']
DEFAULT_PASSWORD = 'P@ssw0rd'
# Blocking pysqlite driver on the same file as the app's aiosqlite engine
SYNC_DATABASE_URL = settings.DATABASE_URL_ASYNC.replace('sqlite+aiosqlite://', 'sqlite://')


# =============================================================================
# Database Cleanup
# =============================================================================
def _clean_all_tables() -> None:
    # Sync engine: cleanup must not depend on whichever event loop owns the app engine
    engine = create_engine(SYNC_DATABASE_URL)
    try:
        with engine.begin() as conn:
            existing = {
                row[0]
                for row in conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
            }
            for table in TABLES_IN_DELETE_ORDER:
                if table in existing:
                    conn.execute(text(f'DELETE FROM "{table}"'))
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def clean_database(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Unit tests never touch the database
    if 'unit' not in [m.name for m in request.node.iter_markers()]:
        _clean_all_tables()
    yield


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        engine = create_engine(SYNC_DATABASE_URL)
        try:
            with engine.begin() as conn:
                conn.execute(text('PRAGMA foreign_keys=ON'))
                result = conn.execute(text(statement), params or {})
                if fetch:
                    return [dict(row._mapping) for row in result]
        finally:
            engine.dispose()
        return None

    return _execute


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from stagepass.main import app
    from stagepass.platform.config.di import container
    from stagepass.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
        BcryptPasswordHasher,
    )

    # Cheap hashing keeps registration fast
    with container.password_hasher.override(BcryptPasswordHasher(rounds=4)):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client


# =============================================================================
# User Helpers
# =============================================================================
def register_user(
    client: TestClient, username: str, email: str, organizer: bool = False
) -> dict[str, Any]:
    response = client.post(
        '/api/register',
        json={
            'username': username,
            'email': email,
            'password': DEFAULT_PASSWORD,
            'organizer': organizer,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def login_headers(client: TestClient, email: str) -> dict[str, str]:
    response = client.post('/api/login', json={'email': email, 'password': DEFAULT_PASSWORD})
    assert response.status_code == 200, response.text
    return {'Authorization': f'Bearer {response.json()["token"]}'}


@pytest.fixture
def make_user_headers(client: TestClient) -> Callable[..., dict[str, str]]:
    def _make(username: str, organizer: bool = False) -> dict[str, str]:
        email = f'{username}@t.com'
        register_user(client, username, email, organizer=organizer)
        return login_headers(client, email)

    return _make


@pytest.fixture
def organizer_headers(client: TestClient) -> dict[str, str]:
    register_user(client, 'organizer', 'organizer@t.com', organizer=True)
    return login_headers(client, 'organizer@t.com')


@pytest.fixture
def other_organizer_headers(client: TestClient) -> dict[str, str]:
    register_user(client, 'other_organizer', 'other_organizer@t.com', organizer=True)
    return login_headers(client, 'other_organizer@t.com')


@pytest.fixture
def fan_headers(client: TestClient) -> dict[str, str]:
    register_user(client, 'fan', 'fan@t.com')
    return login_headers(client, 'fan@t.com')


@pytest.fixture
def another_fan_headers(client: TestClient) -> dict[str, str]:
    register_user(client, 'another_fan', 'another_fan@t.com')
    return login_headers(client, 'another_fan@t.com')


@pytest.fixture
def venue(client: TestClient, organizer_headers: dict[str, str]) -> dict[str, Any]:
    response = client.post(
        '/api/venues',
        json={'name': 'Blue Note', 'address': '131 W 3rd St, New York'},
        headers=organizer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def create_concert(
    client: TestClient, organizer_headers: dict[str, str], venue: dict[str, Any]
) -> Callable[..., dict[str, Any]]:
    def _create(
        num_avail: int = 5,
        price: float = 50.0,
        genre: str = 'Jazz',
        venue_id: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        response = client.post(
            '/api/NewConcert',
            json={
                'artist': 'Kamasi Washington',
                'venueId': venue_id if venue_id is not None else venue['id'],
                'tour': 'Fearless Movement',
                'startsAt': '2026-11-20T20:00:00Z',
                'description': 'One night only',
                'genre': genre,
                'rules': 'No re-entry',
                'tickets': {'type': 'General Admission', 'price': price, 'numAvail': num_avail},
            },
            headers=headers or organizer_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()['concert']

    return _create
