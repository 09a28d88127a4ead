from __future__ import annotations

import threading

from Movies.authorization.claims import Principal
from Movies.authorization.handlers import AuthorizationHandler


class StaticPermissionLookup:
    def __init__(self, countries_by_subject=None, countries=()):
        self.countries_by_subject = countries_by_subject or {}
        self.countries = frozenset(countries)
        self.calls = 0
        self._lock = threading.Lock()

    def get_allowed_countries(self, principal: Principal) -> frozenset[str]:
        with self._lock:
            self.calls += 1
        if principal.subject in self.countries_by_subject:
            return frozenset(self.countries_by_subject[principal.subject])
        return self.countries


def make_handler(requirement, resource_type, vote=None, reason="", barrier=None):
    """Build a handler that succeeds, fails or abstains (``vote=None``)."""

    class _Handler(AuthorizationHandler):
        def handle(self, context, principal, req, resource):
            self.seen.append((principal, req, resource))
            if barrier is not None:
                barrier.wait(timeout=5)
            if vote == "succeed":
                context.succeed()
            elif vote == "fail":
                context.fail(reason)

    _Handler.requirement = requirement
    _Handler.resource_type = resource_type
    handler = _Handler()
    handler.seen = []
    return handler


def reviewer(sub="rev1", *extra):
    return Principal.from_claims([("sub", sub), ("role", "Reviewer"), *extra])
