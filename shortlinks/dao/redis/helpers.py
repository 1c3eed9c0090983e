import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Every redis.exceptions.RedisError (connection loss, timeouts, script or
    server errors) surfaces as DataStoreError. Callers never retry these.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_error
        ... def get_record(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.RedisError as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            if isinstance(e, redis.exceptions.ConnectionError):
                raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
            raise DataStoreError(f'Redis at {redis_host}:{redis_port}/{redis_db} failed: {e}') from e

    return wrapper
