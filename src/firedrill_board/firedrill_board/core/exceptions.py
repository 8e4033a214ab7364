class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller has no verified identity in the allowed domain."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the backing data store cannot be read or written."""


class FetchError(StoreError):
    """Raised when a roster, status or absence read fails."""


class WriteError(StoreError):
    """Raised when a status upsert, reset or history append fails."""


class SubscriptionError(DomainError):
    """Raised when the change channel cannot be established."""


class PersonNotLoadedError(DomainError, LookupError):
    """Raised when mutating a person that is not in the loaded list.

    This is a caller contract breach, not an environmental failure.
    """
