from __future__ import annotations

import logging
from typing import Iterable

from .exceptions import PolicyNotFound
from .requirements import Policy, PolicyBuilder

logger = logging.getLogger(__name__)

DEFAULT_POLICY = "DefaultPolicy"
SEARCH_POLICY = "SearchPolicy"


class PolicyRegistry:
    """Process-wide map of policy name to policy, filled once at startup."""

    def __init__(self) -> None:
        self._policies: dict[str, Policy] = {}

    def register(self, name: str | Policy, policy: Policy | None = None) -> Policy:
        """Register ``register(policy)`` under its own name, or ``register(name, policy)`` under ``name``."""
        if isinstance(name, Policy):
            if policy is not None:
                raise TypeError("Pass either register(policy) or register(name, policy).")
            name, policy = name.name, name
        if not isinstance(policy, Policy):
            raise TypeError(f"Expected a Policy for {name!r}, got {type(policy).__name__}.")
        if not isinstance(name, str) or not name:
            raise TypeError(f"Policy name must be a non-empty string, got {name!r}.")

        if name in self._policies:
            logger.warning("Replacing authorization policy %s", name)
        self._policies[name] = policy
        return policy

    def resolve(self, name: str) -> Policy:
        try:
            return self._policies[name]
        except KeyError:
            raise PolicyNotFound(name) from None

    def validate(self, names: Iterable[str]) -> None:
        """Startup check: every policy the application relies on must exist."""
        for name in names:
            self.resolve(name)

    def names(self) -> list[str]:
        return sorted(self._policies)

    def __contains__(self, name: object) -> bool:
        return name in self._policies


def build_default_policies() -> PolicyRegistry:
    registry = PolicyRegistry()
    registry.register(PolicyBuilder(DEFAULT_POLICY).require_authenticated_user().build())
    registry.register(
        PolicyBuilder(SEARCH_POLICY)
        .require_authenticated_user()
        .require_role("Admin", "Customer")
        .build()
    )
    return registry
