"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException.
Stores and the sale ledger hand them back inside an ``Outcome`` rather than
raising; application handlers unwrap and raise them so the CLI layer can
catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InsufficientStockError(ValidationError):
    """A sale asked for more of a product than is in stock."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """A snapshot could not be read or written."""


class CollectionNotFoundError(PersistenceError):
    """No snapshot has ever been saved for a collection."""
