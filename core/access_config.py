# core/access_config.py

"""
Tab, widget and alias registries as explicit, immutable configuration.

The resolver never reads module globals: it is handed an AccessConfig built
either from the shipped defaults below or from a JSON file pointed to by
ACCESS_CONFIG_PATH.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.config import settings
from core.logging_config import logger


class AccessConfigError(ValueError):
    """Raised when a registry file is unreadable or inconsistent."""


class TabConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    permission: str
    category: Literal["core", "data", "admin", "management"]
    order: int


class WidgetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    component: str
    required_permission: Optional[str] = None
    default_size: Literal["small", "medium", "large", "xlarge"] = "medium"
    description: Optional[str] = None


class AccessConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tabs: Tuple[TabConfig, ...]
    widgets: Tuple[WidgetConfig, ...]
    aliases: Dict[str, str] = Field(default_factory=dict)
    equivalents: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    dashboard_tab_id: str = "dashboard"
    strict_widget_match: bool = False

    @model_validator(mode="after")
    def check_registries(self):
        tab_ids = [t.id for t in self.tabs]
        duplicates = sorted({i for i in tab_ids if tab_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate tab ids: {', '.join(duplicates)}")

        widget_ids = [w.id for w in self.widgets]
        duplicates = sorted({i for i in widget_ids if widget_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate widget ids: {', '.join(duplicates)}")

        if self.dashboard_tab_id not in tab_ids:
            raise ValueError(f"Dashboard tab '{self.dashboard_tab_id}' missing from tab registry")

        return self


# ============================================================
# SHIPPED REGISTRIES
# ============================================================
DEFAULT_TABS = (
    TabConfig(id="dashboard", label="Dashboard", permission="dashboard.view", category="core", order=0),
    TabConfig(id="athletes", label="Athletes", permission="athletes.view", category="data", order=10),
    TabConfig(id="probes", label="Probes", permission="probes.view", category="data", order=20),
    TabConfig(id="requests", label="Requests", permission="access_requests.view", category="data", order=30),
    TabConfig(id="messages", label="Messages", permission="messages.view", category="data", order=40),
    TabConfig(id="categories", label="Categories", permission="age_categories.view", category="management", order=50),
    TabConfig(id="users", label="Users", permission="users.view", category="admin", order=100),
    TabConfig(id="roles", label="Roles", permission="roles.view", category="admin", order=110),
    TabConfig(id="permissions", label="Permissions", permission="permissions.view", category="admin", order=120),
)

DEFAULT_WIDGETS = (
    WidgetConfig(
        id="stats-users", name="Users", component="StatsUsersWidget",
        required_permission="users.view", default_size="small",
        description="User statistics",
    ),
    WidgetConfig(
        id="stats-athletes", name="Athletes", component="StatsAthletesWidget",
        required_permission="athletes.view", default_size="small",
        description="Total registered athletes",
    ),
    WidgetConfig(
        id="stats-probes", name="Probes", component="StatsProbesWidget",
        required_permission="probes.view", default_size="small",
        description="Configured probes",
    ),
    WidgetConfig(
        id="stats-permissions", name="Permissions", component="StatsPermissionsWidget",
        required_permission="permissions.view", default_size="small",
        description="Active permissions",
    ),
    WidgetConfig(
        id="recent-users", name="Recent Users", component="RecentUsersWidget",
        required_permission="users.view", description="Latest registered users",
    ),
    WidgetConfig(
        id="recent-probes", name="Recent Probes", component="RecentProbesWidget",
        required_permission="probes.view", description="Latest configured probes",
    ),
    WidgetConfig(
        id="performance-chart", name="Performance Evolution", component="PerformanceChartWidget",
        required_permission="results.view", default_size="large",
        description="Performance evolution chart",
    ),
    WidgetConfig(
        id="recent-results", name="Recent Results", component="RecentResultsWidget",
        required_permission="results.view", description="Latest recorded results",
    ),
    WidgetConfig(
        id="personal-bests", name="Personal Bests", component="PersonalBestWidget",
        required_permission="results.view", description="Recent personal bests per probe",
    ),
    WidgetConfig(
        id="age-distribution", name="Age Distribution", component="AgeDistributionWidget",
        required_permission="athletes.view", description="Athletes per age category",
    ),
    WidgetConfig(
        id="pending-requests", name="Pending Requests", component="PendingRequestsWidget",
        required_permission="access_requests.view", description="Approval requests awaiting review",
    ),
)

# Aliases and equivalents are walked in both directions, so only true
# synonyms belong here. A "create implies view" entry would also grant
# create to every viewer. For that reason probes.create/edit/delete and
# approval_requests.approve do not unlock the Probes or Requests tabs.
DEFAULT_ALIASES = {
    "events.view": "probes.view",
    "events.create": "probes.create",
    "events.edit": "probes.edit",
    "events.delete": "probes.delete",
    "requests.view": "access_requests.view",
    "approval_requests.view": "access_requests.view",
}

DEFAULT_EQUIVALENTS = {
    "access_requests.edit": ("approval_requests.approve",),
    "approval_requests.approve": ("access_requests.edit",),
    "age_categories.view": ("categories.view",),
    "categories.view": ("age_categories.view",),
}


# ============================================================
# BUILDERS
# ============================================================
def default_access_config(**overrides) -> AccessConfig:
    """AccessConfig built from the shipped registries."""
    values = {
        "tabs": DEFAULT_TABS,
        "widgets": DEFAULT_WIDGETS,
        "aliases": DEFAULT_ALIASES,
        "equivalents": DEFAULT_EQUIVALENTS,
    }
    values.update(overrides)
    return AccessConfig(**values)


def load_access_config(path) -> AccessConfig:
    """
    Load registries from a JSON file.

    Recognised keys: tabs, widgets, aliases, equivalents, strict_widget_match,
    dashboard_tab_id. Any registry missing from the file falls back to the
    shipped default.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise AccessConfigError(f"Cannot read access config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise AccessConfigError(f"Access config {path} must be a JSON object")

    known = {"tabs", "widgets", "aliases", "equivalents", "strict_widget_match", "dashboard_tab_id"}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning(f"Ignoring unknown access config keys in {path}: {', '.join(unknown)}")

    try:
        config = default_access_config(**{k: v for k, v in raw.items() if k in known})
    except ValidationError as e:
        raise AccessConfigError(f"Invalid access config {path}: {e}") from e

    logger.info(
        f"Loaded access config from {path}: {len(config.tabs)} tabs, "
        f"{len(config.widgets)} widgets, {len(config.aliases)} aliases"
    )
    return config


@lru_cache(maxsize=1)
def get_access_config() -> AccessConfig:
    """Process-wide config, loaded once on first use."""
    if settings.ACCESS_CONFIG_PATH:
        return load_access_config(settings.ACCESS_CONFIG_PATH)
    return default_access_config()
