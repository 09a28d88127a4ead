from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from .claims import ROLE, Principal


@dataclass(frozen=True, slots=True)
class NamedOperation:
    """Operation requirement such as ``Review`` or ``Edit``, equal by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Assertion:
    """Requirement decided by a pure predicate over the principal alone."""

    predicate: Callable[[Principal], bool]
    description: str = ""

    def evaluate(self, principal: Principal) -> bool:
        return bool(self.predicate(principal))

    def __str__(self) -> str:
        return self.description or getattr(self.predicate, "__name__", "assertion")


Requirement = Union[NamedOperation, Assertion]


@dataclass(frozen=True, slots=True)
class _ClaimCheck:
    claim_type: str
    allowed_values: frozenset[str]

    def __call__(self, principal: Principal) -> bool:
        if not self.allowed_values:
            return principal.find_first(self.claim_type) is not None
        return any(principal.has_claim(self.claim_type, value) for value in self.allowed_values)


def require_claim(claim_type: str, *values: str) -> Assertion:
    """Principal must hold ``claim_type`` with any of ``values`` (any value when empty)."""
    check = _ClaimCheck(claim_type, frozenset(values))
    allowed = " or ".join(sorted(values)) if values else "any value"
    return Assertion(check, f"{claim_type} claim with {allowed}")


def require_role(*roles: str) -> Assertion:
    return require_claim(ROLE, *roles)


class MovieOperations:
    REVIEW = NamedOperation("Review")


class ReviewOperations:
    EDIT = NamedOperation("Edit")


@dataclass(frozen=True, slots=True)
class Policy:
    """Named, non resource-scoped bundle of requirements."""

    name: str
    require_authenticated_user: bool = False
    requirements: tuple[Requirement, ...] = ()


@dataclass(slots=True)
class PolicyBuilder:
    name: str
    _require_authenticated_user: bool = False
    _requirements: list[Requirement] = field(default_factory=list)

    def require_authenticated_user(self) -> "PolicyBuilder":
        self._require_authenticated_user = True
        return self

    def require_role(self, *roles: str) -> "PolicyBuilder":
        return self.add_requirement(require_role(*roles))

    def require_claim(self, claim_type: str, *values: str) -> "PolicyBuilder":
        return self.add_requirement(require_claim(claim_type, *values))

    def require_assertion(
        self, predicate: Callable[[Principal], bool], description: str = ""
    ) -> "PolicyBuilder":
        return self.add_requirement(Assertion(predicate, description))

    def add_requirement(self, requirement: Requirement) -> "PolicyBuilder":
        self._requirements.append(requirement)
        return self

    def build(self) -> Policy:
        return Policy(
            name=self.name,
            require_authenticated_user=self._require_authenticated_user,
            requirements=tuple(self._requirements),
        )
