"""Exceptions raised by the record store."""


class StoreError(Exception):
    """Generic base class for record store exceptions."""


class StoreLoadError(StoreError):
    """Raised when the backing file cannot be created, read or parsed at startup.

    The service must not start serving requests after this error.
    """


class StorePersistenceError(StoreError):
    """Raised when writing the collection to the backing file fails."""


class DuplicateShortCodeError(StoreError):
    """Raised when appending a record whose short code is already stored."""
