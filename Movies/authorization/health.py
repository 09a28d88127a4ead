from __future__ import annotations

from typing import Any

from . import get_authorization_service
from .client import ReviewPermissionClient
from .settings import get_authorization_settings


def authorization_health_snapshot() -> dict[str, Any]:
    config = get_authorization_settings()
    service = get_authorization_service()
    client = ReviewPermissionClient()
    upstream = client.get_health()
    if not isinstance(upstream, dict):
        upstream = {"status": "error", "error": "Unexpected health payload."}

    missing = [name for name in config.required_policies if name not in service.policies]
    return {
        "healthy": not missing and upstream.get("status") not in {"down", "error"},
        "policies": service.policies.names(),
        "missing_policies": missing,
        "handlers": [
            {"requirement": requirement, "resource": resource, "handler": handler}
            for requirement, resource, handler in service.registrations()
        ],
        "parallel_handlers": service.parallel,
        "permissions": {
            "configured": client.is_configured(),
            "local_reviewers": len(config.reviewer_countries),
            "upstream": upstream,
        },
    }
