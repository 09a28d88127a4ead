from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from .claims import Principal
from .contracts import AuthorizationResult, FailureKind
from .exceptions import PolicyNotFound
from .handlers import AuthorizationHandler, AuthorizationHandlerContext
from .policies import PolicyRegistry
from .requirements import Assertion, NamedOperation, Requirement

logger = logging.getLogger(__name__)


def _denied(principal: Principal, reasons: Iterable[str]) -> AuthorizationResult:
    kind = FailureKind.FORBIDDEN if principal.is_authenticated else FailureKind.UNAUTHENTICATED
    return AuthorizationResult.failed(kind, reasons)


class AuthorizationService:
    """Decides whether a principal may perform an operation on a resource.

    Handlers are registered per (operation, resource type) pair and all of
    them vote on every matching check:

    - any explicit failure denies the check;
    - otherwise at least one success is needed;
    - no matching handler, or only abstentions, denies the check.

    Denial is returned as an ``AuthorizationResult``, never raised.
    """

    def __init__(
        self,
        policies: PolicyRegistry,
        handlers: Iterable[AuthorizationHandler] = (),
        *,
        parallel: bool = False,
        max_workers: int = 4,
    ) -> None:
        self.policies = policies
        self.parallel = parallel
        self.max_workers = max_workers
        self._handlers: dict[tuple[NamedOperation, type], list[AuthorizationHandler]] = defaultdict(list)
        for handler in handlers:
            self.add_handler(handler)

    def add_handler(self, handler: AuthorizationHandler) -> None:
        self._handlers[(handler.requirement, handler.resource_type)].append(handler)

    def handlers_for(self, requirement: NamedOperation, resource: Any) -> list[AuthorizationHandler]:
        return list(self._handlers.get((requirement, type(resource)), ()))

    def registrations(self) -> list[tuple[str, str, str]]:
        return [
            (str(requirement), resource_type.__name__, type(handler).__name__)
            for (requirement, resource_type), handlers in self._handlers.items()
            for handler in handlers
        ]

    def authorize(
        self, principal: Principal, resource: Any, requirement: Requirement
    ) -> AuthorizationResult:
        return self.authorize_all(principal, resource, (requirement,))

    def authorize_all(
        self, principal: Principal, resource: Any, requirements: Iterable[Requirement]
    ) -> AuthorizationResult:
        reasons: list[str] = []
        for requirement in requirements:
            ok, requirement_reasons = self._evaluate(principal, resource, requirement)
            if not ok:
                reasons.extend(requirement_reasons or [f"Requirement {requirement} was not satisfied."])

        if reasons:
            logger.info(
                "Authorization denied: principal=%s resource=%s reasons=%s",
                principal.subject or "anonymous",
                _describe(resource),
                reasons,
            )
            return _denied(principal, reasons)
        return AuthorizationResult.success()

    def authorize_policy(self, principal: Principal, policy_name: str) -> AuthorizationResult:
        try:
            policy = self.policies.resolve(policy_name)
        except PolicyNotFound as exc:
            logger.error("Authorization policy lookup failed: %s", exc)
            return AuthorizationResult.failed(FailureKind.POLICY_NOT_FOUND, [str(exc)])

        if policy.require_authenticated_user and not principal.is_authenticated:
            return AuthorizationResult.failed(
                FailureKind.UNAUTHENTICATED,
                [f"Policy {policy.name} requires an authenticated user."],
            )
        return self.authorize_all(principal, None, policy.requirements)

    def _evaluate(
        self, principal: Principal, resource: Any, requirement: Requirement
    ) -> tuple[bool, list[str]]:
        if isinstance(requirement, Assertion):
            return requirement.evaluate(principal), []

        handlers = self.handlers_for(requirement, resource)
        if not handlers:
            logger.debug(
                "No authorization handler for %s on %s",
                requirement,
                type(resource).__name__,
            )
            return False, [f"No handler can authorize {requirement} on {type(resource).__name__}."]

        context = AuthorizationHandlerContext()
        if self.parallel and len(handlers) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(handlers))) as pool:
                futures = [
                    pool.submit(handler.handle, context, principal, requirement, resource)
                    for handler in handlers
                ]
                for future in futures:
                    future.result()
        else:
            for handler in handlers:
                handler.handle(context, principal, requirement, resource)

        return context.has_succeeded, list(context.reasons)


def _describe(resource: Any) -> str:
    if resource is None:
        return "-"
    return f"{type(resource).__name__}:{getattr(resource, 'id', '?')}"
