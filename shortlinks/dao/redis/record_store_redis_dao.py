"""Data Access Object (DAO) implementation of a record store in Redis

This module provides a Redis-based implementation of RecordStoreBaseDAO.

Responsibilities:
    - Insert records with an atomic, uniqueness-enforcing write;
    - Maintain lookup indexes for the indexed fields of each record type;
    - Look up records by their unique field or an indexed field;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    RecordStoreRedisDAO:
        DAO for storing and looking up flat records in a Redis datastore.

Example:
    >>> from shortlinks.dao.redis import RecordStoreRedisDAO

    >>> dao = RecordStoreRedisDAO(prefix="shortlinks:dev")
    >>> dao.insert('short_links', {'code': 'abc123', 'target_url': 'https://example.com/page'})
    <RecordStoreRedisDAO>

    >>> dao.find_one('short_links', 'code', 'abc123')
    {'code': 'abc123', 'target_url': 'https://example.com/page'}
    >>> dao.find_one('short_links', 'target_url', 'https://example.com/page')
    {'code': 'abc123', 'target_url': 'https://example.com/page'}
"""

import json
import logging
from typing import Any

from beartype import beartype

from shortlinks.dao.base import RecordStoreBaseDAO
from shortlinks.dao.schema import get_schema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_error
from shortlinks.dao.exceptions import DataStoreError, UniquenessViolationError


logger = logging.getLogger(__name__)


# KEYS[1]    record key
# KEYS[2..n] index keys
# ARGV[1]    JSON document
# ARGV[2]    unique field value (index target)
INSERT_RECORD_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('SET', KEYS[1], ARGV[1])
for i = 2, #KEYS do
    redis.call('SET', KEYS[i], ARGV[2], 'NX')
end
return 1
"""


class RecordStoreRedisDAO(RedisClientMixin, RecordStoreBaseDAO):
    """Redis-based Data Access Object (DAO) for flat records

    This class implements the RecordStoreBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(record_type: str, fields: dict, **kwargs) -> RecordStoreRedisDAO:
            Store a record and its lookup indexes in one Lua script.
            Raises UniquenessViolationError when the unique field value is taken.
            Raises DataStoreError on any Redis failure.

        find_one(record_type: str, field: str, value: str, **kwargs) -> dict | None:
            Retrieve a record by its unique field or one of its indexed fields.
            Raises DataStoreError on any Redis failure.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._insert_record = self.redis.register_script(INSERT_RECORD_SCRIPT)

    @handle_redis_error
    @beartype
    def insert(self, record_type: str, fields: dict[str, Any], **kwargs) -> 'RecordStoreRedisDAO':
        """Insert a record into Redis

        The existence check, the record write and every index write execute
        inside a single Lua script, so Redis alone decides which of several
        concurrent writers of the same unique value wins. Index keys are
        written with SET NX: the first committed record for a field value
        stays the authoritative lookup result.

        Args:
            record_type (str):
                Name of the record type, e.g. 'short_links'.
            fields (dict):
                Flat, JSON-serializable record containing the unique field.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RecordStoreRedisDAO: self (for method chaining)

        Raises:
            ValueError:
                If the record type is unknown or the unique field is missing.
            UniquenessViolationError:
                If a record with the same unique field value already exists.
            DataStoreError:
                If a Redis failure occurs.

        Example:
            >>> dao.insert('short_links', {'code': 'abc123', 'target_url': 'https://example.com'})
            <RecordStoreRedisDAO>
        """
        schema = get_schema(record_type)
        if fields.get(schema.unique_field) is None:
            raise ValueError(f"Record '{record_type}' is missing unique field '{schema.unique_field}'.")

        unique_value = str(fields[schema.unique_field])
        keys = [self.keys.record_key(record_type, unique_value)]
        for field in schema.indexed_fields:
            if fields.get(field) is not None:
                keys.append(self.keys.index_key(record_type, field, str(fields[field])))

        created = self._insert_record(keys=keys, args=[json.dumps(fields), unique_value])
        if not created:
            raise UniquenessViolationError(f"Record '{record_type}' with {schema.unique_field} '{unique_value}' already exists.")

        logger.debug('Inserted record.', extra={'recordType': record_type, 'uniqueValue': unique_value})
        return self

    @handle_redis_error
    @beartype
    def find_one(self, record_type: str, field: str, value: str, **kwargs) -> dict[str, Any] | None:
        """Retrieve a stored record by exact field equality

        Lookups by the unique field read the record directly. Lookups by an
        indexed field dereference the index key first.

        Args:
            record_type (str):
                Name of the record type, e.g. 'short_links'.
            field (str):
                Unique or indexed field to match on.
            value (str):
                Exact value to match.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            dict | None:
                The stored record, or None if nothing matches.

        Raises:
            ValueError:
                If the record type is unknown or the field is not a lookup field.
            DataStoreError:
                If a Redis failure occurs or the stored document is corrupt.

        Example:
            >>> dao.find_one('short_links', 'target_url', 'https://example.com')
            {'code': 'abc123', 'target_url': 'https://example.com'}
        """
        schema = get_schema(record_type)
        if field not in schema.lookup_fields():
            raise ValueError(f"Field '{field}' of record '{record_type}' is not a lookup field.")

        if field == schema.unique_field:
            unique_value = value
        else:
            unique_value = self.redis.get(self.keys.index_key(record_type, field, value))
            if unique_value is None:
                return None

        document = self.redis.get(self.keys.record_key(record_type, unique_value))
        if document is None:
            return None

        try:
            record = json.loads(document)
        except json.JSONDecodeError as e:
            raise DataStoreError(f"Record '{record_type}' with {schema.unique_field} '{unique_value}' is not valid JSON.") from e
        if not isinstance(record, dict):
            raise DataStoreError(f"Record '{record_type}' with {schema.unique_field} '{unique_value}' is not a JSON object.")
        return record
