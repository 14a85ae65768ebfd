from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError


@pytest.fixture
def table() -> MagicMock:
    """Mock a boto3 DynamoDB Table resource."""
    table = MagicMock()
    table.name = 'VeryTinyUrls'
    table.put_item.return_value = {}
    table.query.return_value = {'Items': [], 'Count': 0}
    return table


@pytest.fixture
def client_error():
    def make(code: str, operation: str = 'PutItem') -> ClientError:
        return ClientError({'Error': {'Code': code, 'Message': f'{code} raised by test'}}, operation)

    return make
