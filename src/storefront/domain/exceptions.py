"""Domain-level exceptions.

All business failures are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly
messages. Each subclass carries a stable ``kind`` that callers can
switch on without parsing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "DomainError"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = "ValidationError"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "NotFound"


class CartNotFoundError(EntityNotFoundError):
    kind = "CartNotFound"


class OrderNotFoundError(EntityNotFoundError):
    kind = "OrderNotFound"


class ProductNotFoundError(EntityNotFoundError):
    kind = "ProductNotFound"


class PlatformNotFoundError(EntityNotFoundError):
    kind = "PlatformNotFound"


class PromptFragmentNotFoundError(EntityNotFoundError):
    kind = "PromptFragmentNotFound"


class SiteNotFoundError(EntityNotFoundError):
    kind = "SiteNotFound"


class SiteTypeNotFoundError(EntityNotFoundError):
    kind = "SiteTypeNotFound"


class StatusNotFoundError(EntityNotFoundError):
    kind = "StatusNotFound"


class CartEmptyError(DomainException):
    """An order cannot be created from a cart with no items."""

    kind = "CartEmpty"


class PersistenceError(DomainException):
    """The atomic order write failed; no order was created."""

    kind = "PersistenceFailure"


class CartClearError(DomainException):
    """Clearing the source cart failed after the order was committed."""

    kind = "CartClearFailure"


class StorageError(Exception):
    """Raised by storage adapters on any I/O or decode fault.

    Deliberately not a DomainException: application services translate
    it into the domain error that matches the step that failed.
    """
