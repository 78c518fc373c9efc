# core/permission_resolver.py

"""
Permission equivalence resolution.

A permission string resolves to the set of every permission considered the
same grant: itself, its base (``.own`` / ``.all`` stripped), its alias
target, everything aliased to it, and its declared equivalents, applied
transitively. A user holds a permission when any of their strings (or the
base of one) lands in that set, or when they hold the wildcard.
"""

from collections import defaultdict
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Literal, Set

from core.access_config import AccessConfig, get_access_config
from core.logging_config import get_logger
from core.permissions import WILDCARD


log = get_logger("resolver")

SCOPE_SUFFIXES = (".own", ".all")


def base_permission(permission: str) -> str:
    """Strip a trailing ``.own`` / ``.all`` scope, if any."""
    for suffix in SCOPE_SUFFIXES:
        if permission.endswith(suffix) and len(permission) > len(suffix):
            return permission[: -len(suffix)]
    return permission


def normalize_permissions(user_permissions) -> List[str]:
    """Non-empty permission strings from a list (or a single string)."""
    if not user_permissions:
        return []
    if isinstance(user_permissions, str):
        return [user_permissions]
    return [p for p in user_permissions if isinstance(p, str) and p]


class PermissionResolver:

    def __init__(self, config: AccessConfig):
        self.config = config
        self.wildcard = WILDCARD

        self._aliases: Dict[str, str] = dict(config.aliases)
        self._reverse_aliases: Dict[str, Set[str]] = defaultdict(set)
        for source, target in self._aliases.items():
            self._reverse_aliases[target].add(source)
        self._equivalents: Dict[str, FrozenSet[str]] = {
            k: frozenset(v) for k, v in config.equivalents.items()
        }

        # Only registry strings are memoized; anything else a caller sends
        # is resolved fresh so the memo stays bounded by the config.
        self._known: FrozenSet[str] = self._registry_permissions()
        self._closures: Dict[str, FrozenSet[str]] = {}

    def _registry_permissions(self) -> FrozenSet[str]:
        known = set(self._aliases) | set(self._aliases.values())
        for permission, group in self._equivalents.items():
            known.add(permission)
            known.update(group)
        known.update(t.permission for t in self.config.tabs)
        known.update(w.required_permission for w in self.config.widgets if w.required_permission)
        return frozenset(known)

    # -----------------------------------------------------
    # Closure
    # -----------------------------------------------------
    def _neighbours(self, permission: str) -> Set[str]:
        found = {base_permission(permission)}
        target = self._aliases.get(permission)
        if target:
            found.add(target)
        found.update(self._reverse_aliases.get(permission, ()))
        found.update(self._equivalents.get(permission, ()))
        return found

    def _closure(self, permission: str) -> FrozenSet[str]:
        visited = {permission}
        worklist = [permission]
        while worklist:
            current = worklist.pop()
            for candidate in self._neighbours(current):
                if candidate and candidate not in visited:
                    visited.add(candidate)
                    worklist.append(candidate)
        return frozenset(visited)

    def resolve(self, permission: str) -> FrozenSet[str]:
        """Every permission equivalent to ``permission``, itself included."""
        if not permission:
            return frozenset()

        cached = self._closures.get(permission)
        if cached is not None:
            return cached

        closure = self._closure(permission)
        if permission in self._known:
            self._closures[permission] = closure
        return closure

    def memo_size(self) -> int:
        return len(self._closures)

    # -----------------------------------------------------
    # Checks
    # -----------------------------------------------------
    def holds_wildcard(self, user_permissions: Iterable[str]) -> bool:
        return self.wildcard in normalize_permissions(user_permissions)

    def matching_permissions(self, required: str, user_permissions: Iterable[str]) -> List[str]:
        """
        Held permissions that satisfy ``required``, in held order.
        The wildcard, when held, satisfies everything and is returned too.
        """
        if not required:
            return []

        closure = self.resolve(required)
        return [
            p for p in normalize_permissions(user_permissions)
            if p == self.wildcard or p in closure or base_permission(p) in closure
        ]

    def has_permission(self, required: str, user_permissions: Iterable[str]) -> bool:
        if self.matching_permissions(required, user_permissions):
            return True

        log.debug(f"'{required}' not satisfied by held permissions")
        return False

    def has_exact_permission(self, required: str, user_permissions: Iterable[str]) -> bool:
        """Literal membership (or wildcard), no alias or suffix expansion."""
        held = normalize_permissions(user_permissions)
        if not held or not required:
            return False
        return self.wildcard in held or required in held

    def has_permissions(
        self,
        required: Iterable[str],
        user_permissions: Iterable[str],
        mode: Literal["any", "all"] = "any",
    ) -> bool:
        required = normalize_permissions(required)
        held = normalize_permissions(user_permissions)
        if not required:
            return False
        if mode == "all":
            return all(self.has_permission(r, held) for r in required)
        return any(self.has_permission(r, held) for r in required)


@lru_cache(maxsize=1)
def get_permission_resolver() -> PermissionResolver:
    return PermissionResolver(get_access_config())
