"""Exceptions raised by the link store and its backends.

Classes:
    KVShortError:
        Generic base class for service exceptions.

    ValidationError:
        Raised when a slug, key or URL is malformed (client fault).

    RecordNotFoundError:
        Raised when a slug has no complete record in the store.

    UnauthorizedError:
        Raised when the presented key does not match the stored owner key.

    StoreError:
        Raised when talking to the key/value store fails (connection issues,
        timeouts, OOM, unexpected replies, etc.).
"""


class KVShortError(Exception):
    """Generic base class for service exceptions."""

    pass


class ValidationError(KVShortError):
    """Exception raised when request input is malformed."""

    pass


class RecordNotFoundError(KVShortError):
    """Exception raised when a slug is unknown or its record is incomplete."""

    pass


class UnauthorizedError(KVShortError):
    """Exception raised when the presented key does not match the owner key."""

    pass


class StoreError(KVShortError):
    """Exception raised when there is an error in the key/value store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
