"""Data Access Object (DAO) implementation for managing links in Redis

Each link is stored as a JSON document under its own key. Redis' native key
expiry implements the passive TTL, and `SET ... NX` is the atomic conditional
insert: an expired key no longer exists, so its short code is free again.

Key layout (see RedisKeySchema):
    <prefix>:links:<shortcode>                 -> JSON link record
    <prefix>:submitters:<submitter>:links      -> SET of short codes

Example:
    >>> from tinylink.models import LinkModel
    >>> from tinylink.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix='tinylink:dev')
    >>> link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000)
    >>> dao.insert(link)
    <InsertOutcome.CREATED: 'created'>
    >>> dao.find('Ab12')[0].url
    'https://example.com'
"""

import json

from beartype import beartype

from tinylink.models import LinkModel
from tinylink.dao.base import LinkBaseDAO, InsertOutcome
from tinylink.dao.redis.mixins import RedisClientMixin
from tinylink.dao.redis.helpers import handle_redis_connection_error


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing links

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, link: LinkModel, **kwargs) -> InsertOutcome:
        """Insert a link with SET NX, expiring at the link's TTL if it has one

        NOTE: The submitter index is updated after the conditional SET succeeds.
              A crash in between leaves a link missing from its submitter's
              listing, never a listed link that doesn't exist.

        Raises:
            DataStoreError:
                If a Redis error occurs.

        Example:
            >>> dao.insert(link)
            <InsertOutcome.CREATED: 'created'>
        """
        link_key = self.keys.link_key(link.shortcode)

        # SET returns None when NX prevented the write
        written = self.redis.set(link_key, json.dumps(link.to_dict()), nx=True, exat=link.ttl)
        if not written:
            return InsertOutcome.CONFLICT

        submitter_links_key = self.keys.submitter_links_key(link.submitter)
        self.redis.sadd(submitter_links_key, link.shortcode)
        return InsertOutcome.CREATED

    @handle_redis_connection_error
    @beartype
    def find(self, shortcode: str, **kwargs) -> list[LinkModel]:
        """Retrieve the link stored under a short code

        Returns:
            list[LinkModel]: A single-element list if found, otherwise an empty list.

        Raises:
            DataStoreError:
                If a Redis error occurs.
        """
        document = self.redis.get(self.keys.link_key(shortcode))
        if document is None:
            return []
        return [LinkModel.from_dict(json.loads(document))]

    @handle_redis_connection_error
    @beartype
    def find_by_submitter(self, submitter: str, **kwargs) -> list[LinkModel]:
        """Retrieve a submitter's links, ordered by short code

        Short codes whose link has already expired are skipped.

        Raises:
            DataStoreError:
                If a Redis error occurs.
        """
        shortcodes = sorted(self.redis.smembers(self.keys.submitter_links_key(submitter)))
        if not shortcodes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for shortcode in shortcodes:
                pipe.get(self.keys.link_key(shortcode))
            documents = pipe.execute()

        return [LinkModel.from_dict(json.loads(document)) for document in documents if document is not None]
