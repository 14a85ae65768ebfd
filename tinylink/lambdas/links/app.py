import logging
import functools

from tinylink.types import LambdaEvent, LambdaContext, LambdaResponse
from tinylink.store import LinkStore
from tinylink.exceptions import TinyLinkError, ValidationError
from tinylink.dao.factory import link_dao_from_config
from tinylink.utils import load_config, load_settings, app_prefix, get_short_url, guarantee_500_response
from tinylink.utils.config import Settings
from tinylink.utils.helpers import json_response
from tinylink.lambdas.links.request import parse_link_request
from tinylink.lambdas.links.constants import (
    REDIRECT_SUCCESS,
    REDIRECT_FALLBACK,
    SHORTCODE_NOT_FOUND,
    LOOKUP_FAILED,
    LINK_CREATED,
    LINK_CREATION_FAILED,
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
)


logger = logging.getLogger(__name__)


@functools.cache
def link_store() -> LinkStore:
    """Build the process-wide LinkStore on first use

    The data store client is created once per Lambda execution environment
    and reused by every invocation. A failed build is not cached, so the next
    invocation tries again.

    Raises:
        TinyLinkError:
            If configuration is missing or malformed, or the data store is unreachable.
    """
    settings = load_settings()
    dao = link_dao_from_config(load_config('links'), prefix=app_prefix())
    logger.info('Initialized link store.', extra={'dao': type(dao).__name__, 'shortcodeLength': settings.shortcode_length})
    return LinkStore.from_settings(dao, settings)


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location},
        'body': '',
    }


def response_201(body: dict) -> LambdaResponse:
    return json_response(201, body)


def response_400(message: str, error_code: str) -> LambdaResponse:
    return json_response(400, {'errorMessage': message, 'errorCode': error_code})


def response_405() -> LambdaResponse:
    return json_response(405, {'errorMessage': 'Operation not supported', 'errorCode': METHOD_NOT_ALLOWED})


def response_500(message: str, error_code: str) -> LambdaResponse:
    return json_response(500, {'errorMessage': message, 'errorCode': error_code})


def redirect(event: LambdaEvent, settings: Settings) -> LambdaResponse:
    """Resolve the `key` path parameter and redirect to its URL

    Every failure mode (no key, unknown key, data store failure) redirects to
    the fallback URL instead of showing an error.
    """
    shortcode = (event.get('pathParameters') or {}).get('key')
    if not shortcode:
        logger.debug('No short code in path. Redirecting to fallback URL.', extra={'event': REDIRECT_FALLBACK})
        return response_301(location=settings.fallback_url)

    try:
        url = link_store().lookup(shortcode)
    except TinyLinkError as e:
        logger.exception(
            'Failed to look up short code. Redirecting to fallback URL.',
            extra={'shortcode': shortcode, 'event': LOOKUP_FAILED, 'error': e.error_code},
        )
        return response_301(location=settings.fallback_url)

    if url is None:
        logger.info(
            'Short code not found. Redirecting to fallback URL.',
            extra={'shortcode': shortcode, 'event': SHORTCODE_NOT_FOUND},
        )
        return response_301(location=settings.fallback_url)

    logger.info('Redirecting client to target URL.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_301(location=url)


def shorten(event: LambdaEvent) -> LambdaResponse:
    """Validate the JSON body and create a link for its `url`"""
    try:
        url, submitter = parse_link_request(event)
    except ValidationError as e:
        logger.info('Rejected link request. Responding with 400.', extra={'event': INVALID_REQUEST, 'error': e.error_code})
        return response_400(str(e), e.error_code)

    try:
        link = link_store().create(url, submitter)
    except TinyLinkError as e:
        logger.exception(
            'Failed to create link. Responding with 500.',
            extra={'url': url, 'event': LINK_CREATION_FAILED, 'error': e.error_code},
        )
        return response_500(f'Error creating link for {url}', e.error_code)

    logger.info('Created link. Responding with 201.', extra={'shortcode': link.shortcode, 'event': LINK_CREATED})
    return response_201({**link.to_dict(), 'shortUrl': get_short_url(link.shortcode, event)})


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle API Gateway proxy requests for short links

    Routing:
        GET  /{key}   Redirect (301) to the link's URL, or to the fallback URL.
        GET  /        Redirect (301) to the fallback URL.
        POST /        Create a link from {"url": ..., "submitter": ...}.
        anything else 405.

    HTTP responses:
        301: Redirect
            headers:
                Location: target URL or fallback URL
        201: Link created
            body: {shortCode, submitter, url, createdTime, ttl?, shortUrl}
        400: Bad client request
            errorMessage: 'url is required', 'url must be a valid web address', ...
        405: Method not allowed
            errorMessage: 'Operation not supported'
        500: Internal server error
            errorMessage: indicate the link could not be created

    Every non-redirect response carries permissive CORS headers.

    Example:
        >>> event = {'httpMethod': 'POST', 'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> event = {'httpMethod': 'GET', 'pathParameters': {'key': 'Ab12'}}
        >>> lambda_handler(event, None)['headers']['Location']
        'https://example.com'
    """
    method = (event.get('httpMethod') or '').upper()

    if method == 'GET':
        return redirect(event, load_settings())
    if method == 'POST':
        return shorten(event)

    logger.info('Unsupported method. Responding with 405.', extra={'method': method, 'event': METHOD_NOT_ALLOWED})
    return response_405()
