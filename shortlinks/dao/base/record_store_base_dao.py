"""Abstract base class for record store data access objects (DAOs).

This class establishes a consistent contract for all record store DAO
implementations, regardless of the underlying storage mechanism (e.g., Redis,
DynamoDB, PostgreSQL).

Responsibilities:
    - Provide an interface for inserting and looking up flat records.
    - Make the atomic, uniqueness-enforcing insert a required capability of
      every store, so that the store (not the application) arbitrates
      concurrent writers.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.dao.redis import RecordStoreRedisDAO

        >>> dao = RecordStoreRedisDAO(...)

        >>> dao.insert('short_links', {'code': 'a1b2c3', 'target_url': 'https://example.com'})
        <RecordStoreRedisDAO>

        >>> dao.find_one('short_links', 'target_url', 'https://example.com')
        {'code': 'a1b2c3', 'target_url': 'https://example.com'}

        >>> dao.insert('short_links', {'code': 'a1b2c3', 'target_url': 'https://other.com'})
        Traceback (most recent call last):
            ...
        shortlinks.dao.exceptions.UniquenessViolationError: ...
"""

from abc import ABC, abstractmethod
from typing import Any


class RecordStoreBaseDAO(ABC):
    """Interface for record store data access objects (DAOs).

    Methods:
        find_one(record_type: str, field: str, value: str, **kwargs) -> dict | None:
            Return any record of `record_type` whose `field` equals `value`.
            Returns None if nothing matches.
            Raises DataStoreError on connection or read failure.

        insert(record_type: str, fields: dict, **kwargs) -> RecordStoreBaseDAO:
            Atomically insert a new record.
            Raises UniquenessViolationError if the unique field value already exists.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations must extend this class and implement
        all abstract methods. `insert()` MUST be a single conditional write:
        either the whole record (and its lookup indexes) is committed, or
        nothing is.

    NOTE:
        - Records are never updated or deleted through this interface.
    """

    @abstractmethod
    def find_one(self, record_type: str, field: str, value: str, **kwargs) -> dict[str, Any] | None:
        """Look up a single record by exact field equality.

        Args:
            record_type (str):
                Name of the record type (e.g. 'short_links').

            field (str):
                Field to match on. Must be the unique field or an indexed field
                of the record type.

            value (str):
                Exact value to match.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            dict | None: The matching record if found, otherwise None.

        Raises:
            ValueError:
                If the field cannot be used for lookups.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, record_type: str, fields: dict[str, Any], **kwargs) -> 'RecordStoreBaseDAO':
        """Insert a new record into the data store.

        Args:
            record_type (str):
                Name of the record type (e.g. 'short_links').

            fields (dict):
                Flat record. Must contain the unique field of the record type.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            RecordStoreBaseDAO: self (for method chaining)

        Raises:
            UniquenessViolationError:
                If a record with the same unique field value already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
