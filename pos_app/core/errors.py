# pos_app/core/errors.py
"""
Domain errors raised by services and repositories.

They are mapped to HTTP responses by the handlers registered in
`pos_app.main`. None of them are retried automatically.
"""


class POSError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(POSError):
    """A precondition failed before any store call was made."""


class StoreError(POSError):
    """The external data store rejected a call or could not be reached."""


class SubmissionError(POSError):
    """Checkout failed and left no partial state behind."""


class PartialSubmissionError(POSError):
    """
    Checkout wrote the transaction header but not its line items.

    `order_id` identifies the orphaned header so it can be reconciled
    manually.
    """

    def __init__(self, message: str, order_id: int):
        super().__init__(message)
        self.order_id = order_id
