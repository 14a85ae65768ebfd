"""Shared client setup for Redis-backed DAOs.

The client is either injected (tests, a shared connection pool) or built from
the `redis_*` parameters of the AppConfig backend section. Construction pings
Redis once, so a misconfigured or unreachable backend fails while the DAO is
built instead of on the first request.

Example:
    >>> class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    ...     pass
    ...
    >>> dao = LinkRedisDAO(redis_host='cache.internal', prefix='tinylink:prod')
    >>> dao.keys.link_key('Ab12')
    'tinylink:prod:links:Ab12'
"""

import redis

from tinylink.dao.redis.redis_key_schema import RedisKeySchema
from tinylink.dao.redis.helpers import handle_redis_connection_error


class RedisClientMixin:
    """Attach a Redis client and a namespaced key schema to a DAO.

    Attributes:
        redis (redis.Redis):
            Client shared by every DAO method.
        keys (RedisKeySchema):
            Key names under the DAO's prefix.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Use `redis_client` if given, else connect with the `redis_*` parameters

        Raises:
            ValueError:
                If port or db isn't an integer.
            DataStoreError:
                If Redis doesn't answer the PING (refused, timed out, auth failure, ...).
        """
        if redis_client is None:
            # AppConfig documents may carry port and db as strings
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

    @handle_redis_connection_error
    def _healthcheck(self) -> None:
        self.redis.ping()
