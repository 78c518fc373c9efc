# tests/test_tab_generator.py

"""
Tests for permission → tab generation.
"""

import pytest

from core.access_config import DEFAULT_TABS, TabConfig, default_access_config
from core.permission_resolver import PermissionResolver
from core.permissions import ROLE_PERMISSIONS
from core.tab_generator import TabGenerator


@pytest.fixture
def tabs(resolver) -> TabGenerator:
    return TabGenerator(resolver)


def tab_ids(result):
    return [t.id for t in result]


def test_empty_permissions_yield_no_tabs(tabs):
    assert tabs.generate_tabs([]) == []
    assert tabs.generate_tabs(None) == []


def test_any_permission_earns_dashboard(tabs):
    assert tab_ids(tabs.generate_tabs(["unknown.permission"])) == ["dashboard"]


def test_wildcard_sees_every_tab_sorted(tabs):
    result = tabs.generate_tabs(["*"])

    assert tab_ids(result) == [t.id for t in sorted(DEFAULT_TABS, key=lambda t: t.order)]
    assert [t.order for t in result] == sorted(t.order for t in result)


def test_events_view_unlocks_probes_tab(tabs):
    assert tab_ids(tabs.generate_tabs(["events.view"])) == ["dashboard", "probes"]


def test_own_scope_unlocks_base_tab(tabs):
    assert tab_ids(tabs.generate_tabs(["athletes.view.own"])) == ["dashboard", "athletes"]


def test_requests_view_own_unlocks_requests_tab(tabs):
    assert "requests" in tab_ids(tabs.generate_tabs(["requests.view.own"]))


def test_equivalent_unlocks_categories_tab(tabs):
    assert "categories" in tab_ids(tabs.generate_tabs(["categories.view"]))


def test_duplicate_and_overlapping_permissions_do_not_duplicate_tabs(tabs):
    result = tabs.generate_tabs([
        "athletes.view", "athletes.view", "athletes.view.own",
        "events.view", "probes.view",
    ])
    ids = tab_ids(result)

    assert len(ids) == len(set(ids))
    assert ids == ["dashboard", "athletes", "probes"]


def test_tabs_sorted_by_order(tabs):
    result = tabs.generate_tabs(["users.view", "athletes.view", "permissions.view", "events.view"])

    assert tab_ids(result) == ["dashboard", "athletes", "probes", "users", "permissions"]


def test_ties_keep_unlock_order():
    config = default_access_config(tabs=[
        TabConfig(id="dashboard", label="Dashboard", permission="dashboard.view", category="core", order=0),
        TabConfig(id="alpha", label="Alpha", permission="alpha.view", category="data", order=10),
        TabConfig(id="beta", label="Beta", permission="beta.view", category="data", order=10),
    ])
    tabs = TabGenerator(PermissionResolver(config))

    assert tab_ids(tabs.generate_tabs(["beta.view", "alpha.view"])) == ["dashboard", "beta", "alpha"]
    assert tab_ids(tabs.generate_tabs(["alpha.view", "beta.view"])) == ["dashboard", "alpha", "beta"]


def test_output_is_deterministic(tabs):
    permissions = ["messages.view", "events.view", "athletes.view"]
    assert tabs.generate_tabs(permissions) == tabs.generate_tabs(permissions)


def test_coach_tabs(tabs):
    ids = tab_ids(tabs.generate_tabs(ROLE_PERMISSIONS["coach"]))

    assert ids == ["dashboard", "athletes", "probes", "requests", "messages"]


def test_parent_tabs(tabs):
    ids = tab_ids(tabs.generate_tabs(ROLE_PERMISSIONS["parent"]))

    assert "athletes" in ids
    assert "users" not in ids
    assert "roles" not in ids


def test_athlete_tabs(tabs):
    ids = tab_ids(tabs.generate_tabs(ROLE_PERMISSIONS["athlete"]))

    assert ids == ["dashboard", "athletes", "probes", "messages"]


def test_get_permission_for_tab(tabs):
    assert tabs.get_permission_for_tab("athletes") == "athletes.view"
    assert tabs.get_permission_for_tab("probes") == "probes.view"
    assert tabs.get_permission_for_tab("categories") == "age_categories.view"
    assert tabs.get_permission_for_tab("requests") == "access_requests.view"
    assert tabs.get_permission_for_tab("unknown-tab") is None


def test_tab_permission_round_trips_through_generation(tabs):
    for tab in DEFAULT_TABS:
        permission = tabs.get_permission_for_tab(tab.id)
        assert tab.id in tab_ids(tabs.generate_tabs([permission]))


def test_write_permissions_do_not_unlock_view_tabs(tabs):
    assert tab_ids(tabs.generate_tabs(["approval_requests.approve"])) == ["dashboard"]
    assert tab_ids(tabs.generate_tabs(["probes.create"])) == ["dashboard"]
    assert tab_ids(tabs.generate_tabs(["probes.delete", "events.edit"])) == ["dashboard"]


def test_approval_viewer_gets_requests_tab(tabs):
    assert tab_ids(tabs.generate_tabs(["approval_requests.view"])) == ["dashboard", "requests"]
