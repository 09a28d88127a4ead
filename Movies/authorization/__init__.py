"""Resource based authorization for movies and reviews.

Views ask the process wide ``AuthorizationService`` whether the current
principal may perform an operation on a movie or a review, and branch on
the returned ``AuthorizationResult``.
"""

from __future__ import annotations

from functools import lru_cache

from .claims import Claim, Principal  # noqa: F401
from .contracts import AuthorizationResult, FailureKind, MovieResource, ReviewResource  # noqa: F401
from .exceptions import PolicyNotFound, ResourceNotFound  # noqa: F401
from .handlers import MovieAuthorizationHandler, ReviewAuthorizationHandler
from .permissions import PermissionLookup, ReviewPermissionService
from .policies import DEFAULT_POLICY, SEARCH_POLICY, PolicyRegistry, build_default_policies  # noqa: F401
from .requirements import MovieOperations, NamedOperation, ReviewOperations  # noqa: F401
from .service import AuthorizationService
from .settings import get_authorization_settings


def build_authorization_service(
    permissions: PermissionLookup | None = None,
    policies: PolicyRegistry | None = None,
) -> AuthorizationService:
    config = get_authorization_settings()
    permissions = permissions or ReviewPermissionService()
    return AuthorizationService(
        policies or build_default_policies(),
        [
            MovieAuthorizationHandler(permissions),
            ReviewAuthorizationHandler(),
        ],
        parallel=config.parallel_handlers,
        max_workers=config.max_workers,
    )


@lru_cache(maxsize=1)
def get_authorization_service() -> AuthorizationService:
    return build_authorization_service()
