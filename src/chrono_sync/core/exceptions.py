class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when an action needs a signed-in user and there is none."""


class StorageError(DomainError):
    """Raised when the local store cannot be read or written."""
