from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


@dataclass(frozen=True, slots=True)
class MovieResource:
    """Read-only movie snapshot an authorization decision is made about."""

    id: int
    country_name: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class ReviewResource:
    """Read-only review snapshot an authorization decision is made about."""

    id: int
    movie_id: int
    user_id: str
    stars: int = 0
    comment: str = ""


class FailureKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    POLICY_NOT_FOUND = "policy_not_found"


@dataclass(frozen=True, slots=True)
class AuthorizationResult:
    """Outcome of one authorization check, consumed by views and middleware."""

    succeeded: bool
    failure_reasons: tuple[str, ...] = ()
    failure: FailureKind | None = None

    @classmethod
    def success(cls) -> "AuthorizationResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, failure: FailureKind, reasons: Iterable[str] = ()) -> "AuthorizationResult":
        return cls(succeeded=False, failure_reasons=tuple(reasons), failure=failure)

    @property
    def is_unauthenticated(self) -> bool:
        return self.failure is FailureKind.UNAUTHENTICATED

    @property
    def is_forbidden(self) -> bool:
        return not self.succeeded and not self.is_unauthenticated

    def __bool__(self) -> bool:
        return self.succeeded
