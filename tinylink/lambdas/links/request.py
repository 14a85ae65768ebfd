"""Parse and validate link creation requests.

Validation is deliberately minimal: `url` must be a non-empty string that
starts with "http" in any letter case. Anything past that prefix is stored
as-is, malformed or not.
"""

import json
import base64
import binascii

from tinylink.types import LambdaEvent
from tinylink.exceptions import RequestBodyError, MissingURLError, InvalidURLError, InvalidSubmitterError


def parse_body(event: LambdaEvent) -> dict:
    """Decode the JSON object in an API Gateway proxy event body

    A missing or empty body decodes to an empty object.

    Raises:
        RequestBodyError:
            If the body isn't valid (base64-wrapped) JSON or isn't a JSON object.
    """
    raw = event.get('body') or ''
    try:
        if event.get('isBase64Encoded'):
            raw = base64.b64decode(raw).decode('utf-8')
        body = json.loads(raw) if raw.strip() else {}
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RequestBodyError('request body must be a JSON object') from e

    if not isinstance(body, dict):
        raise RequestBodyError('request body must be a JSON object')
    return body


def validate_url(url) -> str:
    """Return `url` if it's a non-empty string with an "http" prefix

    Raises:
        MissingURLError: If url is None or empty.
        InvalidURLError: If url isn't a string starting with "http" (case-insensitive).
    """
    if url is None or url == '':
        raise MissingURLError('url is required')
    if not isinstance(url, str) or not url.lower().startswith('http'):
        raise InvalidURLError('url must be a valid web address')
    return url


def parse_link_request(event: LambdaEvent) -> tuple[str, str | None]:
    """Extract and validate (url, submitter) from a POST event

    Raises:
        ValidationError: Any of its subclasses, carrying a client-facing message.
    """
    body = parse_body(event)
    url = validate_url(body.get('url'))

    submitter = body.get('submitter')
    if submitter is not None and not isinstance(submitter, str):
        raise InvalidSubmitterError('submitter must be a string')
    return url, submitter
