# core/permission_store.py

"""
Database-backed permission lookup.

A user's grants are the union of their direct ``user_permissions`` rows and
the ``role_permissions`` of their role. Expired direct grants are skipped.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

from core.cache import cache_delete_prefix, cache_get, cache_set
from core.config import settings
from core.errors import PermissionStoreError, extract_supabase_error
from core.logging_config import get_logger
from core.supabase_client import get_supabase_client


log = get_logger("permission_store")


def _cache_key(user_id: str, role: Optional[str]) -> str:
    return f"perms:{user_id}:{role or ''}"


def _is_expired(expires_at: Optional[str], now: datetime) -> bool:
    if not expires_at:
        return False
    try:
        moment = datetime.fromisoformat(str(expires_at).replace("Z", "+00:00"))
    except ValueError:
        log.warning(f"Unparseable expires_at on user permission: {expires_at!r}")
        return False
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment <= now


def _names_from_rows(rows: Iterable[dict], now: datetime) -> Set[str]:
    names = set()
    for row in rows or []:
        if _is_expired(row.get("expires_at"), now):
            continue
        permission = row.get("permissions") or {}
        name = permission.get("name")
        if name:
            names.add(name)
    return names


def fetch_user_permission_names(user_id: str, role: Optional[str] = None) -> List[str]:
    """
    Sorted permission names granted to ``user_id`` directly or via ``role``.

    Raises PermissionStoreError when Supabase is unavailable or a query
    fails; callers decide how to surface it.
    """
    key = _cache_key(user_id, role)
    cached = cache_get(key)
    if cached is not None:
        return cached

    client = get_supabase_client()
    if client is None:
        raise PermissionStoreError("Supabase client not configured")

    now = datetime.now(timezone.utc)
    try:
        direct = (
            client.table("user_permissions")
            .select("permission_id, expires_at, permissions(name)")
            .eq("user_id", user_id)
            .execute()
        )
        names = _names_from_rows(direct.data, now)

        if role:
            role_result = (
                client.table("roles")
                .select("id")
                .eq("name", role)
                .limit(1)
                .execute()
            )
            if role_result.data:
                role_id = role_result.data[0]["id"]
                granted = (
                    client.table("role_permissions")
                    .select("permission_id, permissions(name)")
                    .eq("role_id", role_id)
                    .execute()
                )
                names |= _names_from_rows(granted.data, now)
            else:
                log.debug(f"Role '{role}' has no row in roles table")
    except Exception as e:
        raise PermissionStoreError(extract_supabase_error(e)) from e

    result = sorted(names)
    cache_set(key, result, settings.PERMISSION_CACHE_TTL_SECONDS)
    return result


def invalidate_user_permissions(user_id: str) -> int:
    """Forget cached lookups for ``user_id`` (after a grant or revoke)."""
    return cache_delete_prefix(f"perms:{user_id}:")
