"""Errors raised by the dispatch workflow.

Rule violations use Protean's ValidationError; these cover the failures that
are not about the caller's input.
"""


class PackingPersistenceError(Exception):
    """A write in the packing workflow failed.

    ``step`` names the write that failed ("order" or "claim").
    Writes completed before it are left in place.
    """

    def __init__(self, step: str, order_id: str, cause: Exception | None = None):
        self.step = step
        self.order_id = order_id
        self.cause = cause
        message = f"Failed to persist {step} for order {order_id}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DistanceLookupError(Exception):
    """The distance-matrix provider could not produce a distance."""
