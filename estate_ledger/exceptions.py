"""Custom exception hierarchy for estate-ledger."""


class EstateLedgerError(Exception):
    """Base exception for all estate-ledger errors."""


class EntityNotFoundError(EstateLedgerError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(EstateLedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(EstateLedgerError):
    """Raised when input data fails validation at the store boundary."""


class PermissionDeniedError(EstateLedgerError):
    """Raised when a user's role lacks the permission for an action."""


class ConfigurationError(EstateLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(EstateLedgerError):
    """Raised when a sink operation fails."""
