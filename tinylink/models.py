from dataclasses import dataclass

from tinylink.types import LinkRecord
from tinylink.constants import ANONYMOUS_SUBMITTER


@dataclass(frozen=True)
class LinkModel:
    """Represent a short code to destination URL mapping.

    Attributes:
        shortcode (str):
            Unique short identifier of the link.
        url (str):
            Destination the short code redirects to.
        created_time (int):
            Creation time as epoch milliseconds. Set once, never updated.
        submitter (str):
            Identifies the creator. Defaults to 'anon'.
        ttl (int | None):
            Epoch seconds after which the data store may drop the record.
            None means the record is retained indefinitely.

    Example:
        >>> link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000)
        >>> link.to_dict()
        {'shortCode': 'Ab12', 'submitter': 'anon', 'url': 'https://example.com', 'createdTime': 1700000000000}
    """

    # fmt: off
    shortcode: str                      # Unique short identifier
    url: str                            # Destination URL
    created_time: int                   # Epoch milliseconds
    submitter: str = ANONYMOUS_SUBMITTER
    ttl: int | None = None              # Epoch seconds, passive expiry marker
    # fmt: on

    def to_dict(self) -> LinkRecord:
        """Serialize into the persisted record layout (camelCase, `ttl` omitted when unset)."""
        record = {
            'shortCode': self.shortcode,
            'submitter': self.submitter,
            'url': self.url,
            'createdTime': self.created_time,
        }
        if self.ttl is not None:
            record['ttl'] = self.ttl
        return record

    @classmethod
    def from_dict(cls, record: LinkRecord) -> 'LinkModel':
        """Deserialize a persisted record.

        Numeric attributes are coerced to int since DynamoDB returns them as Decimal.

        Raises:
            KeyError: If a required attribute is missing from the record.
        """
        ttl = record.get('ttl')
        return cls(
            shortcode=record['shortCode'],
            url=record['url'],
            created_time=int(record['createdTime']),
            submitter=record.get('submitter') or ANONYMOUS_SUBMITTER,
            ttl=None if ttl is None else int(ttl),
        )

    def expired(self, now: int) -> bool:
        """Return True if the record's TTL (epoch seconds) is at or before `now`."""
        return self.ttl is not None and self.ttl <= now
