"""Abstract base class for Link data access objects (DAOs).

This class establishes a consistent contract for all Link DAO implementations,
regardless of the underlying key-value store (e.g., DynamoDB, Redis).

Responsibilities:
    - Conditionally insert a LinkModel keyed by its short code.
    - Query LinkModel records by short code and by submitter.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from tinylink.models import LinkModel
        >>> from tinylink.dao.dynamodb import LinkDynamoDBDAO

        >>> dao = LinkDynamoDBDAO(table_name='VeryTinyUrls')

        >>> link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000)
        >>> dao.insert(link)
        <InsertOutcome.CREATED: 'created'>
        >>> dao.insert(link)
        <InsertOutcome.CONFLICT: 'conflict'>

        >>> dao.find('Ab12')
        [LinkModel(shortcode='Ab12', url='https://example.com', ...)]
        >>> dao.find('nope')
        []
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from tinylink.models import LinkModel


class InsertOutcome(StrEnum):
    """Tagged result of a conditional insert."""

    CREATED = 'created'  # The record was written
    CONFLICT = 'conflict'  # A live record already occupies the short code


class LinkBaseDAO(ABC):
    """Interface for Link data access objects (DAOs).

    Methods:
        insert(link: LinkModel, **kwargs) -> InsertOutcome:
            Write the link only if no unexpired link occupies its short code.
            Raises DataStoreError on connection or write failure.

        find(shortcode: str, **kwargs) -> list[LinkModel]:
            Exact-match query by short code. Returns an empty list if not found.
            Raises DataStoreError on connection or read failure.

        find_by_submitter(submitter: str, **kwargs) -> list[LinkModel]:
            Return all links created by a submitter.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., LinkDynamoDBDAO or
        LinkRedisDAO) must extend this class and implement all abstract methods.

    NOTE:
        - Links are never updated. They disappear only through passive TTL
          expiry or administrative action, so the DAO has no update or delete.
    """

    @abstractmethod
    def insert(self, link: LinkModel, **kwargs) -> InsertOutcome:
        """Insert a new LinkModel unless its short code is taken.

        A short code is taken when a record with that code exists and its TTL
        (if any) has not passed. The check and the write must be a single
        atomic operation in the data store.

        Args:
            link (LinkModel):
                The LinkModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            InsertOutcome:
                CREATED if the link was written, CONFLICT if the short code is taken.

        Raises:
            DataStoreError:
                If there is any other error in the data store.
        """
        pass

    @abstractmethod
    def find(self, shortcode: str, **kwargs) -> list[LinkModel]:
        """Retrieve all unexpired LinkModel records matching a short code.

        Args:
            shortcode (str):
                Caller-supplied short code. Not assumed to match the generation alphabet.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[LinkModel]: Matching records in data store order, empty if none.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_submitter(self, submitter: str, **kwargs) -> list[LinkModel]:
        """Retrieve all unexpired LinkModel records created by a submitter.

        Args:
            submitter (str):
                The submitter identifier.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[LinkModel]: The submitter's links, empty if none.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
