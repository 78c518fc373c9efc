# -------------------------
# Access Models
# -------------------------
from .access import (
    CatalogEntry,
    EffectivePermissions,
    PermissionCheckRequest,
    PermissionCheckResult,
    ResolvedPermission,
    TabPermission,
)

__all__ = [
    "CatalogEntry",
    "EffectivePermissions",
    "PermissionCheckRequest",
    "PermissionCheckResult",
    "ResolvedPermission",
    "TabPermission",
]
