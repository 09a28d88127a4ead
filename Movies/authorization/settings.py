from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


@dataclass(frozen=True, slots=True)
class AuthorizationSettings:
    permissions_base_url: str
    permissions_api_token: str
    timeout_seconds: int
    max_retries: int
    permissions_cache_ttl_seconds: int
    parallel_handlers: bool
    max_workers: int
    access_denied_url: str
    required_policies: tuple[str, ...] = ()
    reviewer_countries: dict[str, Any] = field(default_factory=dict)
    app_claims: dict[str, Any] = field(default_factory=dict)


def get_authorization_settings() -> AuthorizationSettings:
    return AuthorizationSettings(
        permissions_base_url=getattr(settings, "MOVIES_REVIEW_PERMISSIONS_API_BASE_URL", "").rstrip("/"),
        permissions_api_token=getattr(settings, "MOVIES_REVIEW_PERMISSIONS_API_TOKEN", ""),
        timeout_seconds=int(getattr(settings, "MOVIES_REVIEW_PERMISSIONS_API_TIMEOUT_SECONDS", 5)),
        max_retries=int(getattr(settings, "MOVIES_REVIEW_PERMISSIONS_API_MAX_RETRIES", 2)),
        permissions_cache_ttl_seconds=int(
            getattr(settings, "MOVIES_REVIEW_PERMISSIONS_CACHE_TTL_SECONDS", 60)
        ),
        parallel_handlers=bool(getattr(settings, "MOVIES_AUTHORIZATION_PARALLEL_HANDLERS", False)),
        max_workers=int(getattr(settings, "MOVIES_AUTHORIZATION_MAX_WORKERS", 4)),
        access_denied_url=getattr(settings, "MOVIES_ACCESS_DENIED_URL", "/account/denied/"),
        required_policies=tuple(
            getattr(settings, "MOVIES_REQUIRED_POLICIES", ("DefaultPolicy", "SearchPolicy"))
        ),
        reviewer_countries=dict(getattr(settings, "MOVIES_REVIEWER_COUNTRIES", {}) or {}),
        app_claims=dict(getattr(settings, "MOVIES_APP_CLAIMS", {}) or {}),
    )
