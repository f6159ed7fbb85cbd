"""Domain-level exceptions.

Business rejections are subclasses of DomainException so the CLI layer
can catch them uniformly and display user-friendly messages.  The
caller's state is unchanged whenever one of them is raised.

InvariantViolation and StorageError are *not* DomainExceptions: they
signal internal faults and must never be shown as a business rejection.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business precondition was not met."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# --- Not found ----------------------------------------------------------------


class UserNotFound(EntityNotFoundError):
    pass


class ItemNotFound(EntityNotFoundError):
    pass


class LoanNotFound(EntityNotFoundError):
    pass


class ReservationNotFound(EntityNotFoundError):
    pass


class FineNotFound(EntityNotFoundError):
    pass


# --- Precondition failed ------------------------------------------------------


class NoCopiesAvailable(ValidationError):
    pass


class NotEligible(ValidationError):
    """User has overdue loans or unpaid fines."""


class AlreadyReturned(ValidationError):
    pass


class AlreadyPaid(ValidationError):
    pass


class DuplicateReservation(ValidationError):
    pass


class ItemAvailable(ValidationError):
    """Reservations are only taken for items with no copy on the shelf."""


class NotOwner(ValidationError):
    pass


class NotActive(ValidationError):
    pass


class UnsupportedCategory(ValidationError):
    pass


# --- Internal faults ----------------------------------------------------------


class InvariantViolation(Exception):
    """An internal consistency rule was broken (e.g. copies above total)."""


class StorageError(Exception):
    """The storage collaborator failed to read or write a record."""
