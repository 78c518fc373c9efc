from typing import Optional, List
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from core.config import settings
from core.logging_config import logger
from core.permissions import ROLE_PERMISSIONS, WILDCARD
from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Current User Model
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: str

    full_name: Optional[str] = None
    is_active: bool = True

    # Per-user grants on top of the role defaults
    permissions: List[str] = []


# ============================================================
# AUTH DECODING (Supabase: validates JWT + reads metadata)
# ============================================================
def _user_from_metadata(auth_user) -> CurrentUser:
    metadata = auth_user.user_metadata or {}

    # System account used by scheduled jobs
    if metadata.get("cron") is True:
        return CurrentUser(
            id="cron",
            email=auth_user.email,
            role=settings.SUPERADMIN_ROLE,
            full_name="Cron Job",
            permissions=[WILDCARD],
        )

    role = metadata.get("role", settings.DEFAULT_ROLE)
    if role not in ROLE_PERMISSIONS:
        logger.warning(f"Unknown role '{role}' for user {auth_user.id}; using '{settings.DEFAULT_ROLE}'")
        role = settings.DEFAULT_ROLE

    extra = metadata.get("permissions", [])
    if not isinstance(extra, list):
        extra = []

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        role=role,
        full_name=metadata.get("full_name"),
        is_active=metadata.get("is_active", True) is not False,
        permissions=[p for p in extra if isinstance(p, str)],
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise unauthorized

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        auth_resp = client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.debug(f"Token validation failed: {e}")
        raise unauthorized
    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise unauthorized

    user = _user_from_metadata(auth_resp.user)
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is inactive")

    return user
