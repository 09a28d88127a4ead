from __future__ import annotations

import logging
import threading
from typing import Any, ClassVar

from .claims import Principal
from .contracts import MovieResource, ReviewResource
from .permissions import PermissionLookup
from .requirements import MovieOperations, NamedOperation, ReviewOperations

logger = logging.getLogger(__name__)

REVIEWER_ROLE = "Reviewer"
ADMIN_ROLE = "Admin"


class AuthorizationHandlerContext:
    """Vote accumulator shared by every handler of one requirement check.

    Handlers may run on several threads, so votes are recorded under a lock.
    An explicit failure always wins over any number of successes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._succeeded = False
        self._failed = False
        self._reasons: list[str] = []

    def succeed(self) -> None:
        with self._lock:
            self._succeeded = True

    def fail(self, reason: str = "") -> None:
        with self._lock:
            self._failed = True
            if reason:
                self._reasons.append(reason)

    @property
    def has_succeeded(self) -> bool:
        with self._lock:
            return self._succeeded and not self._failed

    @property
    def has_failed(self) -> bool:
        with self._lock:
            return self._failed

    @property
    def reasons(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._reasons)


class AuthorizationHandler:
    """Votes on one operation for one resource type.

    Subclasses set ``requirement`` and ``resource_type`` and implement
    ``handle``. Calling neither ``context.succeed()`` nor ``context.fail()``
    is an abstention.
    """

    requirement: ClassVar[NamedOperation]
    resource_type: ClassVar[type]

    def handle(
        self,
        context: AuthorizationHandlerContext,
        principal: Principal,
        requirement: NamedOperation,
        resource: Any,
    ) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.requirement}, {self.resource_type.__name__})"


class MovieAuthorizationHandler(AuthorizationHandler):
    """Reviewers may review movies from the countries they are cleared for."""

    requirement = MovieOperations.REVIEW
    resource_type = MovieResource

    def __init__(self, permissions: PermissionLookup) -> None:
        self.permissions = permissions

    def handle(self, context, principal, requirement, movie: MovieResource) -> None:
        if not principal.has_role(REVIEWER_ROLE):
            return

        allowed = self.permissions.get_allowed_countries(principal)
        if movie.country_name in allowed:
            context.succeed()
        else:
            logger.debug(
                "Reviewer %s not cleared for %s (movie %s)",
                principal.subject,
                movie.country_name,
                movie.id,
            )


class ReviewAuthorizationHandler(AuthorizationHandler):
    """Admins may edit any review; everybody else only their own."""

    requirement = ReviewOperations.EDIT
    resource_type = ReviewResource

    def handle(self, context, principal, requirement, review: ReviewResource) -> None:
        if principal.has_role(ADMIN_ROLE):
            context.succeed()
            return

        subject = principal.subject
        if subject is not None and subject == review.user_id:
            context.succeed()
