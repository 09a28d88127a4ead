from __future__ import annotations

from typing import Any


def _as_set(value: Any) -> set[str]:
    if not value:
        return set()
    if isinstance(value, (list, tuple, set, frozenset)):
        return {str(item).strip() for item in value if str(item).strip()}
    return {str(value).strip()}


def to_allowed_countries(payload: dict[str, Any]) -> frozenset[str]:
    """
    Adapter for the permission authority payload:
    {
      "subject": "...",
      "countries": ["France", "Germany"]
    }
    Older deployments answer with ``allowed_countries`` instead.
    """
    if "countries" in payload:
        return frozenset(_as_set(payload.get("countries")))
    return frozenset(_as_set(payload.get("allowed_countries")))


def to_local_countries(reviewer_countries: dict[str, Any], subject_id: str) -> frozenset[str]:
    return frozenset(_as_set(reviewer_countries.get(subject_id)))
