# core/tab_generator.py

from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from core.access_config import TabConfig
from core.permission_resolver import (
    PermissionResolver,
    normalize_permissions,
    base_permission,
    get_permission_resolver,
)


class TabGenerator:
    """Turns a user's permissions into the navigation tabs they may open."""

    def __init__(self, resolver: PermissionResolver):
        self.resolver = resolver
        self.tabs = resolver.config.tabs
        self.dashboard_tab_id = resolver.config.dashboard_tab_id

    def all_tabs(self) -> List[TabConfig]:
        return sorted(self.tabs, key=lambda t: t.order)

    def get_tab(self, tab_id: str) -> Optional[TabConfig]:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def get_permission_for_tab(self, tab_id: str) -> Optional[str]:
        """Permission that unlocks ``tab_id``, or None for unknown tabs."""
        tab = self.get_tab(tab_id)
        return tab.permission if tab else None

    def generate_tabs(self, user_permissions: Iterable[str]) -> List[TabConfig]:
        """
        Visible tabs sorted by ``order``.

        No permissions means no tabs at all; any permission earns the
        dashboard. Ties on ``order`` keep the order tabs were unlocked in.
        """
        held = normalize_permissions(user_permissions)
        if not held:
            return []

        if self.resolver.holds_wildcard(held):
            return self.all_tabs()

        unlocked: Dict[str, TabConfig] = {}
        dashboard = self.get_tab(self.dashboard_tab_id)
        if dashboard is not None:
            unlocked[dashboard.id] = dashboard

        for permission in held:
            folded = base_permission(permission)
            for tab in self.tabs:
                if tab.id in unlocked:
                    continue
                closure = self.resolver.resolve(tab.permission)
                if permission in closure or folded in closure:
                    unlocked[tab.id] = tab

        return sorted(unlocked.values(), key=lambda t: t.order)


@lru_cache(maxsize=1)
def get_tab_generator() -> TabGenerator:
    return TabGenerator(get_permission_resolver())
