"""Select the Link DAO implementation from the AppConfig backend section.

Example:
    >>> link_dao_from_config({'dynamodb': {'table_name': 'VeryTinyUrls'}})
    <tinylink.dao.dynamodb.link_dynamodb_dao.LinkDynamoDBDAO object at ...>
    >>> link_dao_from_config({'redis': {'host': 'localhost', 'port': 6379}}, prefix='tinylink:dev')
    <tinylink.dao.redis.link_redis_dao.LinkRedisDAO object at ...>
"""

from tinylink.types import LambdaConfiguration
from tinylink.exceptions import BadConfigurationError
from tinylink.dao.base import LinkBaseDAO
from tinylink.dao.dynamodb import LinkDynamoDBDAO
from tinylink.dao.redis import LinkRedisDAO


def link_dao_from_config(config: LambdaConfiguration, prefix: str | None = None) -> LinkBaseDAO:
    """Build the DAO for the single backend named in `config`

    Connection parameters are forwarded with the backend name as prefix,
    e.g. {'redis': {'host': 'x'}} -> LinkRedisDAO(redis_host='x').

    Args:
        config (dict):
            Output of load_config(): {<backend>: {<param>: <value>, ...}}.
        prefix (str | None):
            Key namespace, used by the Redis backend only.

    Raises:
        BadConfigurationError:
            If the section names no backend, several backends or an unknown one,
            or carries parameters the backend doesn't accept.
        DataStoreError:
            If the data store client can't be created or fails its connectivity check.
    """
    if len(config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend (given: {sorted(config)}).')

    [(backend, params)] = config.items()
    params = params or {}
    if not isinstance(params, dict):
        raise BadConfigurationError(f'Parameters of backend {backend!r} must be an object (given type: {type(params).__name__}).')
    if backend not in {'dynamodb', 'redis'}:
        raise BadConfigurationError(f'Unknown backend {backend!r}.')

    # Unknown parameter names surface as TypeError, malformed values (port, endpoint) as ValueError
    try:
        if backend == 'dynamodb':
            return LinkDynamoDBDAO(**{f'dynamodb_{k}': v for k, v in params.items()})
        return LinkRedisDAO(**{f'redis_{k}': v for k, v in params.items()}, prefix=prefix)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid {backend} parameters in AppConfig: {e}') from e
