# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from core.access_config import default_access_config
from core.permission_resolver import PermissionResolver
from dependencies.auth import CurrentUser, get_current_user


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    application = create_app()
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def resolver() -> PermissionResolver:
    """Resolver over the shipped registries."""
    return PermissionResolver(default_access_config())


@pytest.fixture
def as_user(app):
    """Make every request authenticate as the given CurrentUser."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


@pytest.fixture
def superadmin_user():
    return CurrentUser(
        id="admin-id",
        email="admin@club.test",
        role="superadmin",
    )


@pytest.fixture
def coach_user():
    return CurrentUser(
        id="coach-id",
        email="coach@club.test",
        role="coach",
    )


@pytest.fixture
def parent_user():
    return CurrentUser(
        id="parent-id",
        email="parent@club.test",
        role="parent",
    )


@pytest.fixture
def athlete_user():
    return CurrentUser(
        id="athlete-id",
        email="athlete@club.test",
        role="athlete",
    )


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
