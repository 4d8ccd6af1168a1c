"""Domain-level exceptions.

All business rule violations and collaborator failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidOrderCount(DomainException):
    """The number of orders to process is outside the pending range."""


class FulfillmentError(DomainException):
    """Base class for failures that abort a single order's fulfillment."""


class RemoteUnavailable(FulfillmentError):
    """A remote service could not be reached or did not answer properly."""


class OrderNotFound(FulfillmentError):
    """The Order service has no order with the requested ID."""


class LabelGenerationFailed(FulfillmentError):
    """The Shipping service refused or failed to produce a label."""


class ArtifactWriteFailed(FulfillmentError):
    """A label could not be stored durably."""


class UpdateRejected(FulfillmentError):
    """The Order service refused the tracking-number update."""
