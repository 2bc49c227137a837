class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormat(ValidationError):
    """Raised when a strict "HH:MM" value fails to parse.

    The computation path never raises this; it skips the value instead.
    """


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataAccessFailure(DomainError):
    """Raised when the storage layer could not return rows."""
