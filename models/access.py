# models/access.py

from typing import List, Literal
from pydantic import BaseModel, Field


class EffectivePermissions(BaseModel):
    """Permissions the caller holds after role defaults and overrides are merged."""
    user_id: str
    role: str
    is_superadmin: bool
    permissions: List[str]


class PermissionCheckRequest(BaseModel):
    permissions: List[str] = Field(..., min_length=1, description="Permissions to test")
    mode: Literal["any", "all"] = Field("any", description="Require any or all of them")


class PermissionCheckResult(BaseModel):
    allowed: bool
    matched: List[str] = Field(default_factory=list, description="Requested permissions the caller satisfies")


class ResolvedPermission(BaseModel):
    permission: str
    equivalents: List[str] = Field(..., description="Sorted closure, the permission itself included")


class TabPermission(BaseModel):
    tab_id: str
    permission: str


class CatalogEntry(BaseModel):
    name: str
    label: str
