# tests/test_auth.py

"""
Tests for bearer-token authentication.
"""

from fastapi.testclient import TestClient
from unittest.mock import Mock, patch


def make_auth_client(metadata=None, email="user@club.test", user_id="user-1"):
    auth_user = Mock()
    auth_user.id = user_id
    auth_user.email = email
    auth_user.user_metadata = metadata

    mock_client = Mock()
    mock_client.auth.get_user.return_value = Mock(user=auth_user)
    return mock_client


def get_me(client: TestClient, supabase_client):
    with patch("dependencies.auth.get_supabase_client", return_value=supabase_client):
        return client.get("/access/me", headers={"Authorization": "Bearer test-token"})


def test_missing_token_is_401(client: TestClient):
    response = client.get("/access/me")

    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"


def test_valid_token_reads_metadata(client: TestClient):
    supabase = make_auth_client({"role": "coach", "full_name": "Ana", "permissions": ["users.view"]})

    response = get_me(client, supabase)

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "user-1"
    assert data["role"] == "coach"
    assert "users.view" in data["permissions"]
    supabase.auth.get_user.assert_called_once_with("test-token")


def test_rejected_token_is_401(client: TestClient):
    supabase = Mock()
    supabase.auth.get_user.side_effect = Exception("invalid JWT")

    response = get_me(client, supabase)

    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication required"


def test_token_without_user_is_401(client: TestClient):
    supabase = Mock()
    supabase.auth.get_user.return_value = Mock(user=None)

    assert get_me(client, supabase).status_code == 401


def test_inactive_account_is_403(client: TestClient):
    supabase = make_auth_client({"role": "parent", "is_active": False})

    response = get_me(client, supabase)

    assert response.status_code == 403
    assert response.json()["detail"] == "Account is inactive"


def test_unknown_role_falls_back_to_default(client: TestClient):
    supabase = make_auth_client({"role": "groundskeeper"})

    data = get_me(client, supabase).json()

    assert data["role"] == "athlete"
    assert "athletes.view.own" in data["permissions"]


def test_missing_metadata_uses_default_role(client: TestClient):
    data = get_me(client, make_auth_client(None)).json()

    assert data["role"] == "athlete"


def test_malformed_permission_metadata_is_ignored(client: TestClient):
    supabase = make_auth_client({"role": "parent", "permissions": "users.view"})

    data = get_me(client, supabase).json()

    assert "users.view" not in data["permissions"]


def test_cron_account_is_superadmin(client: TestClient):
    supabase = make_auth_client({"cron": True}, email="cron@club.test")

    data = get_me(client, supabase).json()

    assert data["user_id"] == "cron"
    assert data["is_superadmin"] is True
    assert data["permissions"] == ["*"]


def test_missing_supabase_client_is_500(client: TestClient):
    response = get_me(client, None)

    assert response.status_code == 500
