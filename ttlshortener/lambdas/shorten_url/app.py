import json
import logging
from typing import Any

from ttlshortener.constants import ErrorCode
from ttlshortener.shortening import Shortener
from ttlshortener.dao import build_short_url_dao
from ttlshortener.dao.exceptions import DataStoreError, DeadlineExceededError
from ttlshortener.exceptions import RandomnessUnavailableError, ShortcodeExhaustedError
from ttlshortener.utils import load_config, get_short_url, app_prefix, validate_target_url, request_deadline
from ttlshortener.utils.helpers import guarantee_500_response
from ttlshortener.utils.responses import response_201, response_400, response_500, response_503, response_504


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract and validate the target URL from the request body
    - Step 2: Connect to the configured data store
    - Step 3: Reserve a random shortcode for the target URL (retrying on collisions)
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            short_key: newly generated shortcode
            url: original url (provided in request)
            short_url: newly generated short url
        400: Bad client request
            message: invalid JSON, missing 'url' or not an absolute http(s) URL
        500: Internal server error
            message: no unique shortcode found, randomness unavailable or unknown error
        503: Data store unavailable
        504: Request deadline exceeded

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['short_key']
        'q3ZkR0bA'
    """
    deadline = request_deadline(context)

    # 1- Extract and validate target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': ErrorCode.INVALID_REQUEST_BODY})
        return response_400(message='invalid JSON body', error_code=ErrorCode.INVALID_REQUEST_BODY)

    target_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not target_url:
        logger.info("Missing 'url' in request body. Responding with 400.", extra={'event': ErrorCode.INVALID_REQUEST_BODY})
        return response_400(message="missing 'url' in JSON body", error_code=ErrorCode.INVALID_REQUEST_BODY)
    if not validate_target_url(target_url):
        logger.info('Invalid target URL. Responding with 400.', extra={'event': ErrorCode.INVALID_TARGET_URL})
        return response_400(message='URL must be absolute with http(s) scheme', error_code=ErrorCode.INVALID_TARGET_URL)

    # 2- Connect to the data store
    app_config = load_config('shorten_url')
    try:
        short_url_dao = build_short_url_dao(app_config, prefix=app_prefix())
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': ErrorCode.DATA_STORE_UNAVAILABLE})
        return response_503(error_code=ErrorCode.DATA_STORE_UNAVAILABLE)

    # 3- Reserve a unique shortcode for the target URL
    try:
        short_url = Shortener(short_url_dao).shorten(target_url, deadline=deadline)
    except ShortcodeExhaustedError:
        logger.error('No unique shortcode found. Responding with 500.', extra={'event': ErrorCode.SHORTCODE_EXHAUSTED})
        return response_500(message='failed to generate a unique key', error_code=ErrorCode.SHORTCODE_EXHAUSTED)
    except RandomnessUnavailableError:
        logger.exception('Randomness unavailable. Responding with 500.', extra={'event': ErrorCode.RANDOMNESS_UNAVAILABLE})
        return response_500(message='failed to generate a key', error_code=ErrorCode.RANDOMNESS_UNAVAILABLE)
    except DeadlineExceededError:
        logger.warning('Deadline exceeded while storing short URL. Responding with 504.', extra={'event': ErrorCode.DEADLINE_EXCEEDED})
        return response_504(error_code=ErrorCode.DEADLINE_EXCEEDED)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': ErrorCode.DATA_STORE_UNAVAILABLE})
        return response_503(error_code=ErrorCode.DATA_STORE_UNAVAILABLE)

    # 4- Return successful response to user
    short_url_string = get_short_url(short_url.shortcode, event)
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={'shortcode': short_url.shortcode, 'event': ErrorCode.SHORTEN_SUCCESS},
    )
    return response_201(
        {
            'short_key': short_url.shortcode,
            'url': target_url,
            'short_url': short_url_string,
        }
    )
