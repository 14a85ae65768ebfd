"""Data Access Object (DAO) implementation for managing links in DynamoDB

Table layout:
    - Partition key `shortCode` (string). It is the sole primary key, so the
      table can never hold two records for the same short code.
    - Global secondary index `SubmitterIndex` on `submitter`.
    - DynamoDB TTL enabled on the `ttl` attribute (epoch seconds).

DynamoDB deletes expired items lazily (up to days after `ttl`), so both the
conditional insert and the queries treat a record whose `ttl` has passed as
absent.

Example:
    >>> from tinylink.dao.dynamodb import LinkDynamoDBDAO
    >>> dao = LinkDynamoDBDAO(dynamodb_table_name='VeryTinyUrls')
    >>> dao.insert(link)
    <InsertOutcome.CREATED: 'created'>
"""

import time
import logging
from typing import Any

import boto3
from beartype import beartype
from botocore.exceptions import BotoCoreError, ClientError
from boto3.dynamodb.conditions import Attr, Key

from tinylink.models import LinkModel
from tinylink.constants import SUBMITTER_INDEX
from tinylink.exceptions import BadConfigurationError
from tinylink.dao.exceptions import DataStoreError
from tinylink.dao.base import LinkBaseDAO, InsertOutcome
from tinylink.dao.dynamodb.helpers import handle_dynamodb_error, is_conditional_check_failure


logger = logging.getLogger(__name__)


def _unexpired(now: int):
    return Attr('ttl').not_exists() | Attr('ttl').gt(now)


class LinkDynamoDBDAO(LinkBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for managing links

    Attributes:
        table (boto3 DynamoDB Table resource):
            Table the links are persisted in.
        table_name (str):
            Name of that table.
        submitter_index (str):
            Name of the GSI keyed by submitter.
    """

    def __init__(
        self,
        dynamodb_table_name: str | None = None,
        dynamodb_region: str | None = None,
        dynamodb_endpoint_url: str | None = None,
        dynamodb_submitter_index: str = SUBMITTER_INDEX,
        dynamodb_table: Any | None = None,
    ):
        """Initialize a DynamoDB-based DAO

        Either pass a pre-built Table resource, or the table name (plus optional
        region / endpoint, e.g. for LocalStack) to build one.

        Raises:
            BadConfigurationError:
                If neither a table nor a table name is given.
            DataStoreError:
                If boto3 can't build the resource (no region, unknown profile, ...).
        """
        if dynamodb_table is None:
            if not dynamodb_table_name:
                raise BadConfigurationError('Either dynamodb_table or dynamodb_table_name must be provided.')
            try:
                dynamodb = boto3.resource('dynamodb', region_name=dynamodb_region, endpoint_url=dynamodb_endpoint_url)
            except BotoCoreError as e:
                raise DataStoreError(f"Can't create DynamoDB resource for table {dynamodb_table_name}.") from e
            dynamodb_table = dynamodb.Table(dynamodb_table_name)

        self.table = dynamodb_table
        self.table_name = dynamodb_table_name or getattr(dynamodb_table, 'name', None)
        self.submitter_index = dynamodb_submitter_index

    @handle_dynamodb_error
    @beartype
    def insert(self, link: LinkModel, **kwargs) -> InsertOutcome:
        """Conditionally put a link, refusing to overwrite a live record

        Raises:
            DataStoreError:
                On any DynamoDB failure other than the conditional check.
        """
        now = int(time.time())
        try:
            self.table.put_item(
                Item=link.to_dict(),
                ConditionExpression='attribute_not_exists(shortCode) OR #ttl <= :now',
                ExpressionAttributeNames={'#ttl': 'ttl'},
                ExpressionAttributeValues={':now': now},
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                return InsertOutcome.CONFLICT
            raise
        return InsertOutcome.CREATED

    @handle_dynamodb_error
    @beartype
    def find(self, shortcode: str, **kwargs) -> list[LinkModel]:
        """Query unexpired links by short code, in DynamoDB order

        Raises:
            DataStoreError:
                On any DynamoDB failure (including a short code DynamoDB rejects as a key).
        """
        response = self.table.query(
            KeyConditionExpression=Key('shortCode').eq(shortcode),
            FilterExpression=_unexpired(int(time.time())),
        )
        return [LinkModel.from_dict(item) for item in response.get('Items', [])]

    @handle_dynamodb_error
    @beartype
    def find_by_submitter(self, submitter: str, **kwargs) -> list[LinkModel]:
        """Query the submitter index, following pagination

        Raises:
            DataStoreError:
                On any DynamoDB failure.
        """
        query = {
            'IndexName': self.submitter_index,
            'KeyConditionExpression': Key('submitter').eq(submitter),
            'FilterExpression': _unexpired(int(time.time())),
        }

        links = []
        while True:
            response = self.table.query(**query)
            links.extend(LinkModel.from_dict(item) for item in response.get('Items', []))

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            logger.debug('Fetching next page of submitter links.', extra={'submitter': submitter})
            query['ExclusiveStartKey'] = last_key

        return links
