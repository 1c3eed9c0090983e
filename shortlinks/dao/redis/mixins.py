"""Shared Redis client plumbing for record store DAOs.

A DAO built on RedisClientMixin either receives a ready client or builds one
from `redis_*` connection parameters (see RedisConfig.as_dao_kwargs()). The
client is PINGed once at construction, so an unusable store fails fast with
DataStoreError instead of on the first lookup.

Example:
    >>> class RecordStoreRedisDAO(RedisClientMixin, RecordStoreBaseDAO):
    ...     pass
    ...
    >>> dao = RecordStoreRedisDAO(prefix='shortlinks:prod')
    >>> dao._healthcheck()
    True
"""

from typing import Optional

import redis

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.helpers import handle_redis_error
from shortlinks.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Redis client setup and healthcheck for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Client used by subclasses for every command.
        keys (RedisKeySchema):
            Namespaced key builder for records and lookup indexes.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Attach a Redis client and verify the store answers.

        Args:
            redis_host, redis_port, redis_db, redis_username, redis_password:
                Connection parameters, ignored when `redis_client` is given.
            redis_decode_responses (Optional[bool]):
                Return str instead of bytes. Defaults to True.
            redis_client (Optional[redis.Redis]):
                Pre-initialized client, e.g. a shared or fake one.
            prefix (Optional[str]):
                Key namespace such as 'shortlinks:prod'.

        Raises:
            DataStoreError:
                If the initial PING fails for any Redis reason.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    @handle_redis_error
    def _ping(self) -> bool:
        return self.redis.ping()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis.

        Connection refusals, timeouts and error replies (e.g. LOADING) all
        count as an unavailable store.

        Returns:
            bool: True if Redis answered. False on failure when raise_error=False.

        Raises:
            DataStoreError: on failure when raise_error=True.
        """
        try:
            self._ping()
        except DataStoreError:
            if raise_error:
                raise
            return False
        return True
