# routers/access.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from core.access_config import TabConfig, WidgetConfig
from core.permission_helpers import (
    authorize,
    authorize_db,
    get_effective_permissions,
    is_superadmin,
)
from core.permission_resolver import PermissionResolver, get_permission_resolver
from core.permission_store import invalidate_user_permissions
from core.permissions import PERMISSION_CATALOG
from core.tab_generator import TabGenerator, get_tab_generator
from core.widget_filter import WidgetFilter, get_widget_filter
from dependencies.auth import CurrentUser, get_current_user
from models.access import (
    CatalogEntry,
    EffectivePermissions,
    PermissionCheckRequest,
    PermissionCheckResult,
    ResolvedPermission,
    TabPermission,
)

router = APIRouter(
    prefix="/access",
    tags=["Access"],
)


# -----------------------------------------------------
# Caller-scoped views
# -----------------------------------------------------
@router.get("/me", response_model=EffectivePermissions, summary="Caller's effective permissions")
def my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    return EffectivePermissions(
        user_id=current_user.id,
        role=current_user.role,
        is_superadmin=is_superadmin(current_user),
        permissions=get_effective_permissions(current_user),
    )


@router.get("/me/tabs", response_model=List[TabConfig], summary="Navigation tabs for the caller")
def my_tabs(
    current_user: CurrentUser = Depends(get_current_user),
    tabs: TabGenerator = Depends(get_tab_generator),
):
    """
    Tabs sorted by display order. The dashboard is included whenever the
    caller holds at least one permission.
    """
    return tabs.generate_tabs(get_effective_permissions(current_user))


@router.get("/me/widgets", response_model=List[WidgetConfig], summary="Dashboard widgets for the caller")
def my_widgets(
    current_user: CurrentUser = Depends(get_current_user),
    widgets: WidgetFilter = Depends(get_widget_filter),
):
    return widgets.visible_widgets(get_effective_permissions(current_user))


@router.get("/me/widgets/{widget_id}", summary="Can the caller render this widget")
def my_widget_access(
    widget_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    widgets: WidgetFilter = Depends(get_widget_filter),
):
    return {
        "widget_id": widget_id,
        "visible": widgets.can_access_widget(widget_id, get_effective_permissions(current_user)),
    }


@router.post("/check", response_model=PermissionCheckResult, summary="Test permissions for the caller")
def check_permissions(
    payload: PermissionCheckRequest,
    current_user: CurrentUser = Depends(get_current_user),
    resolver: PermissionResolver = Depends(get_permission_resolver),
):
    held = get_effective_permissions(current_user)
    matched = [p for p in payload.permissions if resolver.has_permission(p, held)]
    return PermissionCheckResult(
        allowed=resolver.has_permissions(payload.permissions, held, mode=payload.mode),
        matched=matched,
    )


# -----------------------------------------------------
# Registry views (admin)
# -----------------------------------------------------
@router.get(
    "/resolve/{permission}",
    response_model=ResolvedPermission,
    dependencies=[Depends(authorize("permissions.view"))],
)
def resolve_permission(
    permission: str,
    resolver: PermissionResolver = Depends(get_permission_resolver),
):
    return ResolvedPermission(
        permission=permission,
        equivalents=sorted(resolver.resolve(permission)),
    )


@router.get(
    "/tabs",
    response_model=List[TabConfig],
    dependencies=[Depends(authorize("permissions.view"))],
)
def list_tabs(tabs: TabGenerator = Depends(get_tab_generator)):
    return tabs.all_tabs()


@router.get("/tabs/{tab_id}/permission", response_model=TabPermission)
def tab_permission(
    tab_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    tabs: TabGenerator = Depends(get_tab_generator),
):
    permission = tabs.get_permission_for_tab(tab_id)
    if permission is None:
        raise HTTPException(status_code=404, detail=f"Unknown tab '{tab_id}'")
    return TabPermission(tab_id=tab_id, permission=permission)


@router.get(
    "/widgets",
    response_model=List[WidgetConfig],
    dependencies=[Depends(authorize("permissions.view"))],
)
def list_widgets(widgets: WidgetFilter = Depends(get_widget_filter)):
    return widgets.all_widgets()


@router.get(
    "/catalog",
    response_model=List[CatalogEntry],
    dependencies=[Depends(authorize_db("permissions.view", "roles.view"))],
)
def permission_catalog():
    return [CatalogEntry(name=name, label=label) for name, label in PERMISSION_CATALOG.items()]


@router.post(
    "/users/{user_id}/refresh",
    dependencies=[Depends(authorize_db("permissions.edit"))],
    summary="Drop cached database grants for a user",
)
def refresh_user_permissions(user_id: str):
    """Call after changing a user's grants so the next check reads the tables."""
    return {"user_id": user_id, "invalidated": invalidate_user_permissions(user_id)}
