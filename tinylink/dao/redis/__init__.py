from tinylink.dao.redis.redis_key_schema import RedisKeySchema
from tinylink.dao.redis.mixins import RedisClientMixin
from tinylink.dao.redis.link_redis_dao import LinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
]
