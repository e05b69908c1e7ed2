"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Adapters translate driver/client errors into them at the boundary.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist in any source."""


class ValidationError(DomainError):
    """Input violates a request validation rule."""


class ExternalSourceError(DomainError):
    """The external user source could not be reached or answered badly."""


class PersistenceError(DomainError):
    """The record store failed to read or write."""
