"""Link Store: short code allocation and lookup on top of a Link DAO.

The store owns the uniqueness protocol. It never locks or caches anything;
the DAO's atomic conditional insert is the only synchronization point, so
concurrent writers racing on the same random code are serialized by the
data store and the losers simply draw a new code.

Example:
    >>> from tinylink.dao.redis import LinkRedisDAO
    >>> store = LinkStore(LinkRedisDAO(prefix='tinylink:dev'))
    >>> link = store.create('https://example.com/some/long/path')
    >>> link.shortcode
    'Xq3b'
    >>> store.lookup('Xq3b')
    'https://example.com/some/long/path'
    >>> store.lookup('nope') is None
    True
"""

import time
import logging

from tinylink.models import LinkModel
from tinylink.constants import ANONYMOUS_SUBMITTER, Defaults
from tinylink.dao.base import LinkBaseDAO, InsertOutcome
from tinylink.dao.exceptions import ShortcodeAllocationError
from tinylink.utils.config import Settings
from tinylink.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class LinkStore:
    """Create links with globally unique short codes and resolve them.

    Attributes:
        dao (LinkBaseDAO):
            Data store access. Shared by reference, never rebuilt by the store.
        shortcode_length (int):
            Number of characters in generated short codes.
        max_attempts (int):
            Conditional inserts attempted before create() gives up.
        link_ttl_seconds (int | None):
            Lifetime stamped on new links, None for no expiry.
    """

    def __init__(
        self,
        dao: LinkBaseDAO,
        shortcode_length: int = Defaults.SHORTCODE_LENGTH,
        max_attempts: int = Defaults.MAX_CREATE_ATTEMPTS,
        link_ttl_seconds: int | None = None,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.shortcode_length = shortcode_length
        self.max_attempts = max_attempts
        self.link_ttl_seconds = link_ttl_seconds

    @classmethod
    def from_settings(cls, dao: LinkBaseDAO, settings: Settings) -> 'LinkStore':
        return cls(
            dao,
            shortcode_length=settings.shortcode_length,
            max_attempts=settings.max_create_attempts,
            link_ttl_seconds=settings.link_ttl_seconds,
        )

    def create(self, url: str, submitter: str | None = None) -> LinkModel:
        """Persist a new link under a freshly generated, unused short code.

        `url` is stored as given; validating it is the caller's job.

        Each attempt draws a random code and inserts it conditionally. A
        CONFLICT outcome means a live link already owns the code, so a new code
        is drawn. Any DAO exception aborts immediately without a retry.

        Args:
            url (str):
                Destination URL.
            submitter (str | None):
                Creator identifier, 'anon' if None or empty.

        Returns:
            LinkModel: The persisted link, including its creation time.

        Raises:
            ShortcodeAllocationError:
                If every attempt collided with an existing short code.
            DataStoreError:
                If the data store fails.
        """
        submitter = submitter or ANONYMOUS_SUBMITTER
        now = time.time()
        created_time = int(now * 1000)
        ttl = None if self.link_ttl_seconds is None else int(now) + self.link_ttl_seconds

        for attempt in range(1, self.max_attempts + 1):
            link = LinkModel(
                shortcode=generate_shortcode(self.shortcode_length),
                url=url,
                created_time=created_time,
                submitter=submitter,
                ttl=ttl,
            )

            outcome = self.dao.insert(link)
            if outcome is InsertOutcome.CREATED:
                logger.info('Created link.', extra={'shortcode': link.shortcode, 'submitter': submitter, 'attempt': attempt})
                return link

            logger.info('Duplicate short code generated. Retrying.', extra={'shortcode': link.shortcode, 'attempt': attempt})

        logger.error('Gave up allocating a short code.', extra={'url': url, 'attempts': self.max_attempts})
        raise ShortcodeAllocationError(f'No free short code found after {self.max_attempts} attempts.')

    def lookup(self, shortcode: str) -> str | None:
        """Resolve a short code to its destination URL.

        If the data store returns several records for the code, the first live
        one wins. Creation keeps codes unique, so this only matters for records
        written out of band. Records past their TTL are skipped even when the
        backend still returns them.

        Args:
            shortcode (str):
                Untrusted, caller-supplied short code.

        Returns:
            str | None: The destination URL, or None if no live link has this code.

        Raises:
            DataStoreError:
                If the data store fails. Distinct from "not found".
        """
        now = int(time.time())
        links = [link for link in self.dao.find(shortcode) if not link.expired(now)]
        if not links:
            logger.debug('Short code not found.', extra={'shortcode': shortcode})
            return None

        if len(links) > 1:
            logger.warning('Multiple links share a short code. Using the first.', extra={'shortcode': shortcode, 'matches': len(links)})
        return links[0].url

    def links_for(self, submitter: str | None = None) -> list[LinkModel]:
        """Return every live link created by `submitter` ('anon' if None or empty)."""
        now = int(time.time())
        return [link for link in self.dao.find_by_submitter(submitter or ANONYMOUS_SUBMITTER) if not link.expired(now)]
