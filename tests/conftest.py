"""Global test fixtures and utilities for progression tests"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from contextlib import asynccontextmanager

from src.gamification.mock_store import InMemoryStore


# ============================================================================
# Record Store Fixtures
# ============================================================================

@pytest.fixture
def test_profile_id():
    """Standard test profile ID"""
    return "profile-0001"


@pytest.fixture
def empty_store(test_profile_id):
    """All XP collections provisioned but empty, plus one profile"""
    return InMemoryStore({
        "skills": [],
        "projects": [],
        "certifications": [],
        "experiences": [],
        "achievements": [],
        "courses": [],
        "habits": [],
        "profiles": [{"id": test_profile_id, "full_name": "Test Hunter", "level": 1, "xp": 0}],
    })


@pytest.fixture
def sample_store(test_profile_id):
    """Store holding the reference dataset (640 XP total)"""
    return InMemoryStore({
        "skills": [{"id": "s1", "name": "Python", "level": 50}],
        "projects": [{"id": "p1", "is_featured": True}],
        "certifications": [{"id": "c1"}, {"id": "c2"}],
        "experiences": [{"id": "e1"}],
        "achievements": [],
        "courses": [{"id": "co1", "progress": 40}],
        "habits": [{"id": "h1", "streak": 10}],
        "profiles": [{"id": test_profile_id, "full_name": "Test Hunter", "level": 1, "xp": 0}],
    })


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def mock_db_cursor():
    """Mock database cursor with standard query results"""
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    cursor.execute = AsyncMock()
    return cursor


@pytest.fixture
def mock_database(mock_db_cursor):
    """Mock Database whose connection() yields a connection with mock_db_cursor"""
    conn = MagicMock()
    conn.commit = AsyncMock()

    @asynccontextmanager
    async def cursor_cm():
        yield mock_db_cursor

    conn.cursor = MagicMock(side_effect=lambda: cursor_cm())

    @asynccontextmanager
    async def connection_cm():
        yield conn

    database = MagicMock()
    database.connection = MagicMock(side_effect=lambda: connection_cm())
    database.conn = conn
    return database
