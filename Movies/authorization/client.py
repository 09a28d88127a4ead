from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from .exceptions import ContractError, UpstreamUnavailable
from .settings import get_authorization_settings

RETRYABLE_STATUSES = (502, 503, 504)


class ReviewPermissionClient:
    """Read-only HTTP client for the review permission authority."""

    def __init__(self) -> None:
        self.config = get_authorization_settings()

    def is_configured(self) -> bool:
        return bool(self.config.permissions_base_url)

    def get_reviewer_permissions(self, subject_id: str) -> dict[str, Any]:
        if not self.is_configured():
            raise ContractError("Review permission URL is not configured.")
        payload = self._get(f"/reviewers/{quote(subject_id, safe='')}/permissions")
        if not isinstance(payload, dict):
            raise ContractError("Unexpected permissions payload (expected object).")
        return payload

    def get_health(self) -> dict[str, Any]:
        if not self.is_configured():
            return {"status": "not_configured"}
        try:
            payload = self._get("/health")
        except UpstreamUnavailable:
            return {"status": "down"}
        except ContractError as exc:
            return {"status": "error", "error": str(exc)}
        if not isinstance(payload, dict):
            return {"status": "error", "error": "Unexpected health payload (expected object)."}
        return payload

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.permissions_api_token:
            headers["Authorization"] = f"Bearer {self.config.permissions_api_token}"
        return headers

    def _get(self, path: str) -> Any:
        """GET ``path`` from the authority, retrying network and gateway failures."""
        url = f"{self.config.permissions_base_url}{path}"
        failure = ""
        for _ in range(self.config.max_retries + 1):
            try:
                response = requests.request(
                    method="GET",
                    url=url,
                    timeout=self.config.timeout_seconds,
                    headers=self._headers(),
                )
            except requests.RequestException as exc:
                failure = str(exc)
                continue

            if response.status_code in RETRYABLE_STATUSES:
                failure = f"status {response.status_code}"
                continue
            if response.status_code >= 400:
                raise ContractError(
                    f"Permission lookup for {path} failed ({response.status_code}): {response.text[:300]}"
                )
            try:
                return response.json()
            except ValueError as exc:
                raise ContractError("Permission response is not valid JSON.") from exc

        raise UpstreamUnavailable(f"Permission authority unreachable for {path}: {failure}")
