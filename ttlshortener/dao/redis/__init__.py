from ttlshortener.dao.redis.redis_key_schema import RedisKeySchema
from ttlshortener.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from ttlshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortURLRedisDAO',
    'RedisClientMixin',
]
