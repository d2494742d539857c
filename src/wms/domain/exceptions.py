"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
The API client maps HTTP failures onto the same taxonomy.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the available stock."""


class InvalidStateError(DomainException):
    """A ledger operation does not match the current stock state."""


class InvalidTransitionError(DomainException):
    """The requested order status change is not permitted."""


class AuthError(DomainException):
    """Missing, expired or rejected credentials."""


class NetworkError(DomainException):
    """The API could not be reached or failed to answer."""
