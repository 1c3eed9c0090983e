from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.record_store_redis_dao import RecordStoreRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'RecordStoreRedisDAO',
]
