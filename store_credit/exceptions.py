"""Custom exception hierarchy for store-credit."""


class StoreCreditError(Exception):
    """Base exception for all store-credit errors."""


class InvalidArgumentError(StoreCreditError):
    """Raised for non-positive amounts or terms and unrecognized enum values."""


class LimitExceededError(StoreCreditError):
    """Raised when an operation would push used credit past the credit limit."""


class EntityNotFoundError(StoreCreditError):
    """Raised when a referenced customer, loan or installment does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(StoreCreditError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(StoreCreditError):
    """Raised when configuration is invalid or missing."""


class StorageError(StoreCreditError):
    """Raised when a storage backend cannot load or save records."""


class SinkError(StoreCreditError):
    """Raised when an event sink operation fails."""
