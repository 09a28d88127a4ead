from __future__ import annotations

import logging
from typing import Protocol

from django.core.cache import cache

from .adapter import to_allowed_countries, to_local_countries
from .claims import Principal
from .client import ReviewPermissionClient
from .exceptions import ContractError, UpstreamUnavailable
from .settings import get_authorization_settings

logger = logging.getLogger(__name__)


class PermissionLookup(Protocol):
    def get_allowed_countries(self, principal: Principal) -> frozenset[str]: ...


def _cache_key(subject_id: str) -> str:
    return f"authorization:review-countries:{subject_id}"


class ReviewPermissionService:
    """Read-only lookup of the countries a reviewer may review.

    Answers come from the permission authority when it is configured, and
    from the ``MOVIES_REVIEWER_COUNTRIES`` setting otherwise. Lookup failures
    yield no countries.
    """

    def __init__(self, client: ReviewPermissionClient | None = None) -> None:
        self.config = get_authorization_settings()
        self.client = client or ReviewPermissionClient()

    def get_allowed_countries(self, principal: Principal) -> frozenset[str]:
        subject_id = principal.subject
        if not subject_id:
            return frozenset()

        if not self.client.is_configured():
            return to_local_countries(self.config.reviewer_countries, subject_id)

        key = _cache_key(subject_id)
        cached = cache.get(key)
        if cached is not None:
            return frozenset(cached)

        try:
            payload = self.client.get_reviewer_permissions(subject_id)
        except (UpstreamUnavailable, ContractError) as exc:
            logger.warning("Review permissions unavailable for %s: %s", subject_id, exc)
            return frozenset()

        countries = to_allowed_countries(payload)
        cache.set(key, sorted(countries), timeout=self.config.permissions_cache_ttl_seconds)
        return countries

    def forget(self, subject_id: str) -> None:
        cache.delete(_cache_key(subject_id))
