"""Domain-level exceptions.

All business rule violations and store failures are expressed as subclasses
of DomainException so the stock loops and the CLI layer can catch them
uniformly and turn them into user-facing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreError(DomainException):
    """The persistence backend failed to read or write a record."""
