import logging
from typing import Any

from ttlshortener.constants import ErrorCode
from ttlshortener.dao import build_short_url_dao
from ttlshortener.dao.exceptions import DataStoreError, DeadlineExceededError, ShortURLNotFoundError
from ttlshortener.utils import load_config, app_prefix, validate_shortcode, request_deadline
from ttlshortener.utils.helpers import guarantee_500_response
from ttlshortener.utils.responses import response_200, response_204, response_400, response_503, response_504


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to delete short URLs

    This Lambda handler follows this procedure to delete URLs:
    - Step 1: Extract and validate shortcode from request path
    - Step 2: Delete short URL record from database
    - Step 3: Respond with 200 if it was deleted, 204 if there was nothing to delete

    HTTP responses:
        200: Short URL deleted
        204: Short URL didn't exist (or already expired); deleting is idempotent for clients
        400: Bad client request
            message: malformed shortcode
        503: Data store unavailable
        504: Request deadline exceeded

    Example:
        >>> event = {'pathParameters': {'shortcode': 'aB1cD2eF'}}
        >>> lambda_handler(event, None)['statusCode']
        200
        >>> lambda_handler(event, None)['statusCode']
        204
    """
    deadline = request_deadline(context)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not validate_shortcode(shortcode):
        logger.info(
            'Invalid shortcode in path. Responding with 400.',
            extra={'shortcode': shortcode, 'event': ErrorCode.INVALID_SHORTCODE},
        )
        return response_400(message='invalid URL key format', error_code=ErrorCode.INVALID_SHORTCODE)

    # 2- Delete short_url record from database
    app_config = load_config('delete_url')
    try:
        short_url_dao = build_short_url_dao(app_config, prefix=app_prefix())
        short_url_dao.delete(shortcode, deadline=deadline)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 204.',
            extra={'shortcode': shortcode, 'event': ErrorCode.SHORT_URL_NOT_FOUND},
        )
        return response_204()
    except DeadlineExceededError:
        logger.warning(
            'Deadline exceeded while deleting short URL. Responding with 504.',
            extra={'shortcode': shortcode, 'event': ErrorCode.DEADLINE_EXCEEDED},
        )
        return response_504(error_code=ErrorCode.DEADLINE_EXCEEDED)
    except DataStoreError:
        logger.exception(
            'Data store unavailable. Responding with 503.',
            extra={'shortcode': shortcode, 'event': ErrorCode.DATA_STORE_UNAVAILABLE},
        )
        return response_503(error_code=ErrorCode.DATA_STORE_UNAVAILABLE)

    # 3- Confirm deletion
    logger.info(
        'Deleted short URL. Responding with 200.',
        extra={'shortcode': shortcode, 'event': ErrorCode.DELETE_SUCCESS},
    )
    return response_200({'message': f"Short URL '{shortcode}' deleted", 'short_key': shortcode})
