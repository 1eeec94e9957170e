"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated invariant. Never worth retrying."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(NotFoundError):
    pass


class OrderNotFound(NotFoundError):
    pass


class PaymentNotFound(NotFoundError):
    pass


class CustomerNotFound(NotFoundError):
    pass


class GatewayUnavailable(DomainException):
    """The payment gateway call failed: timeout, refusal or an unusable answer.

    Nothing was persisted, so the whole checkout can be retried.
    """


class ConflictingState(DomainException):
    """A business rule was violated while applying an external event.

    Retrying cannot change the conflicting fact; an operator has to look.
    """


class ConflictingOrderState(ConflictingState):
    """The order is not in a status that allows the requested transition."""


class DuplicateNotification(DomainException):
    """A settlement notification arrived for an already settled payment."""
