"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    UniquenessViolationError:
        Raised when inserting a record whose unique field value already exists.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from shortlinks.dao.exceptions import UniquenessViolationError
    >>> raise UniquenessViolationError("Record 'short_links' with code 'abc123' already exists.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.UniquenessViolationError: Record 'short_links' with code 'abc123' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class UniquenessViolationError(DAOError):
    """Exception raised when a record with the same unique field value already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
