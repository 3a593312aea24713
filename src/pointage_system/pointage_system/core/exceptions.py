class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a submission is missing a field or carries a malformed one."""


class StoreError(DomainError):
    """Raised when the backing store is unreachable or a write fails."""


class LocationUnavailableError(DomainError):
    """Raised when no location fix could be obtained for a punch."""
