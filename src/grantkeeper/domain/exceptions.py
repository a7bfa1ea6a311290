"""Domain exceptions."""


class GrantKeeperError(Exception):
    """Base exception for GrantKeeper."""

    pass


class Unauthorized(GrantKeeperError):
    """Request is not authenticated."""

    pass


class PermissionDenied(GrantKeeperError):
    """User does not have permission for the requested action."""

    pass


class NotFound(GrantKeeperError):
    """Requested resource was not found."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} '{key}' is not found")
        self.kind = kind
        self.key = key


class PreconditionFailed(GrantKeeperError):
    """Request cannot be applied in the current state."""

    pass


class ValidationError(PreconditionFailed):
    """Validation failed for input data."""

    pass
