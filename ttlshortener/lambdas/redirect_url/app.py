import logging
from typing import Any

from ttlshortener.constants import ErrorCode
from ttlshortener.dao import build_short_url_dao
from ttlshortener.dao.exceptions import DataStoreError, DeadlineExceededError, ShortURLNotFoundError
from ttlshortener.utils import load_config, app_prefix, validate_shortcode, request_deadline
from ttlshortener.utils.helpers import guarantee_500_response
from ttlshortener.utils.responses import response_302, response_404, response_503, response_504


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract and validate shortcode from request path
    - Step 2: Get short URL record from database (refreshes its TTL)
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        404: Not found
            message: malformed shortcode, or short URL doesn't exist (or expired)
        503: Data store unavailable
        504: Request deadline exceeded

    Args:
        event (dict):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object.

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'aB1cD2eF'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    deadline = request_deadline(context)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not validate_shortcode(shortcode):
        logger.info(
            'Invalid shortcode in path. Responding with 404.',
            extra={'shortcode': shortcode, 'event': ErrorCode.INVALID_SHORTCODE},
        )
        return response_404(message='invalid URL key format', error_code=ErrorCode.INVALID_SHORTCODE)

    # 2- Get short_url record from database
    app_config = load_config('redirect_url')
    try:
        short_url_dao = build_short_url_dao(app_config, prefix=app_prefix())
        short_url = short_url_dao.get(shortcode, deadline=deadline)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': ErrorCode.SHORT_URL_NOT_FOUND},
        )
        return response_404(message='URL not found', error_code=ErrorCode.SHORT_URL_NOT_FOUND)
    except DeadlineExceededError:
        logger.warning(
            'Deadline exceeded while reading short URL. Responding with 504.',
            extra={'shortcode': shortcode, 'event': ErrorCode.DEADLINE_EXCEEDED},
        )
        return response_504(error_code=ErrorCode.DEADLINE_EXCEEDED)
    except DataStoreError:
        logger.exception(
            'Data store unavailable. Responding with 503.',
            extra={'shortcode': shortcode, 'event': ErrorCode.DATA_STORE_UNAVAILABLE},
        )
        return response_503(error_code=ErrorCode.DATA_STORE_UNAVAILABLE)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': ErrorCode.REDIRECT_SUCCESS},
    )
    return response_302(location=short_url.target)
