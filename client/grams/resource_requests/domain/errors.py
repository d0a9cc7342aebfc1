from typing import Optional


class DomainError(Exception):
    """Base domain error with a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PermissionDenied(DomainError):
    """Raised when the backend refuses the caller's credentials."""


class NotFound(DomainError):
    """Raised when a required entity is missing."""


class InvalidRequest(DomainError):
    """Raised when a local precondition fails; nothing was sent."""


class GatewayError(DomainError):
    """Raised when the backend call fails or reports success=false."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
