# core/widget_filter.py

from functools import lru_cache
from typing import Iterable, List, Optional

from core.access_config import WidgetConfig
from core.permission_resolver import PermissionResolver, normalize_permissions, get_permission_resolver


class WidgetFilter:
    """Dashboard widget visibility."""

    def __init__(self, resolver: PermissionResolver):
        self.resolver = resolver
        self.widgets = resolver.config.widgets
        self.strict = resolver.config.strict_widget_match

    def all_widgets(self) -> List[WidgetConfig]:
        return list(self.widgets)

    def get_widget(self, widget_id: str) -> Optional[WidgetConfig]:
        for widget in self.widgets:
            if widget.id == widget_id:
                return widget
        return None

    def can_access_widget(self, widget_id: str, user_permissions: Iterable[str]) -> bool:
        widget = self.get_widget(widget_id)
        if widget is None:
            return False

        # Public widget
        if not widget.required_permission:
            return True

        if self.strict:
            return self.resolver.has_exact_permission(widget.required_permission, user_permissions)
        return self.resolver.has_permission(widget.required_permission, user_permissions)

    def visible_widgets(self, user_permissions: Iterable[str]) -> List[WidgetConfig]:
        held = normalize_permissions(user_permissions)
        return [w for w in self.widgets if self.can_access_widget(w.id, held)]


@lru_cache(maxsize=1)
def get_widget_filter() -> WidgetFilter:
    return WidgetFilter(get_permission_resolver())
