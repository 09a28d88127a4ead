class AuthorizationError(Exception):
    """Base authorization exception."""


class PolicyNotFound(AuthorizationError):
    """Raised when a named policy has not been registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Authorization policy {name!r} is not registered.")
        self.name = name


class ResourceNotFound(AuthorizationError):
    """Raised by resource loaders when the requested record does not exist."""


class PermissionLookupError(AuthorizationError):
    """Base exception for the review permission authority."""


class ContractError(PermissionLookupError):
    """Raised for non-retryable permission lookup issues."""


class UpstreamUnavailable(PermissionLookupError):
    """Raised when the permission authority is unavailable."""
