# tests/test_health.py

"""
Tests for health endpoints.
"""

from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from core.supabase_client import ping_supabase


def test_health_app_reports_registries(client: TestClient):
    data = client.get("/health/app").json()

    assert data["status"] == "ok"
    assert data["tabs"] == 9
    assert data["widgets"] == 11


def test_ping_all_tables_ok(mock_supabase_client):
    mock_supabase_client.table.return_value.select.return_value.limit.return_value.execute.return_value = Mock(
        data=[{"id": 1}]
    )
    with patch("core.supabase_client.get_supabase_client", return_value=mock_supabase_client):
        result = ping_supabase()

    assert result["status"] == "ok"
    assert set(result["tables"]) == {"permissions", "roles", "role_permissions", "user_permissions"}


def test_ping_degraded_when_a_table_fails(mock_supabase_client):
    ok = Mock()
    ok.select.return_value.limit.return_value.execute.return_value = Mock(data=[])
    broken = Mock()
    broken.select.side_effect = Exception("relation does not exist")
    mock_supabase_client.table.side_effect = lambda name: broken if name == "user_permissions" else ok

    with patch("core.supabase_client.get_supabase_client", return_value=mock_supabase_client):
        result = ping_supabase()

    assert result["status"] == "degraded"
    assert result["tables"]["user_permissions"]["status"] == "error"


def test_health_db_not_configured(client: TestClient):
    with patch("core.supabase_client.get_supabase_client", return_value=None):
        data = client.get("/health/db").json()

    assert data["status"] == "not_configured"
