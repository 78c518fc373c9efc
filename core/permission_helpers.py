from fastapi import Depends, HTTPException
from typing import List, Optional

from core.config import settings
from core.errors import PermissionStoreError, authorization_error
from core.logging_config import logger
from core.permission_resolver import PermissionResolver, get_permission_resolver
from core.permission_store import fetch_user_permission_names
from core.permissions import ROLE_PERMISSIONS, WILDCARD
from dependencies.auth import CurrentUser, get_current_user


# -----------------------------------------------------
# Collect effective permissions:
#   • role-based permissions
#   • user-specific grants from user_metadata["permissions"]
# -----------------------------------------------------
def is_superadmin(user: CurrentUser) -> bool:
    return user.role == settings.SUPERADMIN_ROLE


def get_effective_permissions(user: CurrentUser) -> List[str]:
    # Superadmin = master key
    if is_superadmin(user):
        return [WILDCARD]

    effective = list(ROLE_PERMISSIONS.get(user.role, []))
    for permission in user.permissions or []:
        if permission not in effective:
            effective.append(permission)
    return effective


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_permission(
    user: CurrentUser,
    permission: str,
    resolver: Optional[PermissionResolver] = None,
) -> bool:
    resolver = resolver or get_permission_resolver()
    return resolver.has_permission(permission, get_effective_permissions(user))


def _insufficient(user: CurrentUser, permissions) -> HTTPException:
    logger.info(f"Denied user {user.id} ({user.role}): requires one of {list(permissions)}")
    return HTTPException(status_code=403, detail="Insufficient permissions")


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def authorize(*permissions: str):
    """
    Allow when the caller is the superadmin role, holds the wildcard, or
    holds any of ``permissions`` (alias and suffix aware).

    Usage:
        @router.get("/", dependencies=[Depends(authorize("events.view"))])
    """

    def dependency(
        user: CurrentUser = Depends(get_current_user),
        resolver: PermissionResolver = Depends(get_permission_resolver),
    ) -> CurrentUser:
        if is_superadmin(user):
            return user

        held = get_effective_permissions(user)
        if not resolver.has_permissions(permissions, held, mode="any"):
            raise _insufficient(user, permissions)
        return user

    return dependency


def authorize_db(*permissions: str):
    """
    Same contract as ``authorize`` but grants come from the permission
    tables (direct user grants plus role grants) instead of token metadata.
    """

    def dependency(
        user: CurrentUser = Depends(get_current_user),
        resolver: PermissionResolver = Depends(get_permission_resolver),
    ) -> CurrentUser:
        if is_superadmin(user):
            return user

        try:
            held = fetch_user_permission_names(user.id, user.role)
        except PermissionStoreError as e:
            raise authorization_error(e) from e

        if not resolver.has_permissions(permissions, held, mode="any"):
            raise _insufficient(user, permissions)
        return user

    return dependency
