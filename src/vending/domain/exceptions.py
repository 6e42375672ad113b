"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the orchestrator and CLI can catch them uniformly.  PreconditionViolation
is the odd one out: it signals a defect in the caller, not a user mistake.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Caller input was rejected (bad denomination, empty id, negative count)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OutOfStockError(DomainException):
    """The product exists but has no units left."""


class PreconditionViolation(Exception):
    """An internal contract was broken, e.g. applying a failed change result."""


# --- Purchase preconditions ---------------------------------------------------


class NoProductSelectedError(DomainException):
    """Purchase attempted with nothing selected."""


class InsufficientFundsError(DomainException):
    """Inserted money does not cover the price."""

    def __init__(self, message: str, shortfall: int) -> None:
        super().__init__(message)
        self.shortfall = shortfall


class ChangeUnavailableError(DomainException):
    """The coin inventory cannot pay out the exact change due."""

    def __init__(self, message: str, change_due: int, shortfall: int) -> None:
        super().__init__(message)
        self.change_due = change_due
        self.shortfall = shortfall
