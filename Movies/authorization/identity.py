from __future__ import annotations

from typing import Any

from .claims import NAME, ROLE, SUBJECT, Claim, Principal
from .settings import get_authorization_settings


class AppClaimsService:
    """Application specific claims merged into a principal at sign-in."""

    def __init__(self) -> None:
        self.config = get_authorization_settings()

    def get_claims(self, username: str) -> list[Claim]:
        entries = self.config.app_claims.get(username) or []
        claims = []
        for entry in entries:
            if isinstance(entry, dict):
                claim_type, value = entry.get("type"), entry.get("value")
            else:
                claim_type, value = entry
            if claim_type and value is not None:
                claims.append(Claim(str(claim_type), str(value)))
        return claims


def _group_names(user: Any) -> list[str]:
    groups = getattr(user, "groups", None)
    if groups is None:
        return []
    return [str(name) for name in groups.values_list("name", flat=True)]


def principal_from_user(user: Any, *, authentication_type: str = "Cookies") -> Principal:
    if user is None or not getattr(user, "is_authenticated", False):
        return Principal.anonymous()

    username = str(getattr(user, "username", "") or user.pk)
    claims = [Claim(SUBJECT, username)]
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    if full_name:
        claims.append(Claim(NAME, full_name))
    claims.extend(Claim(ROLE, name) for name in _group_names(user))
    for claim in AppClaimsService().get_claims(username):
        if claim not in claims:
            claims.append(claim)
    return Principal(claims=tuple(claims), authentication_type=authentication_type)


def principal_from_request(request) -> Principal:
    """Principal for the current request, cached on the request object."""
    principal = getattr(request, "principal", None)
    if isinstance(principal, Principal):
        return principal
    principal = principal_from_user(getattr(request, "user", None))
    request.principal = principal
    return principal
