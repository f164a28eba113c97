"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event (or BASE_URL)
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    validate_target_url() -> bool
        Check that a URL is absolute with an http(s) scheme
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unhandled handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from ttlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
import urllib.parse
from typing import Any
from collections.abc import Callable

from ttlshortener.types import LambdaEvent
from ttlshortener.constants import ENV, ErrorCode
from ttlshortener.exceptions import MissingEnvironmentVariableError
from ttlshortener.utils.runtime import running_locally
from ttlshortener.utils.responses import response_500


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Return the public base URL for the current Lambda invocation.

    An explicit BASE_URL environment variable always wins.
    Otherwise works with both custom and default AWS API Gateway domains:
    if a custom domain is configured, the stage name is omitted;
    if using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(ENV.App.BASE_URL)
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain.startswith(('localhost', '127.0.0.1')):
        return f'http://{domain}'
    elif domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: LambdaEvent) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def validate_target_url(url: Any) -> bool:
    """Check that a URL to be shortened is absolute with an http or https scheme

    Example:
        >>> validate_target_url('https://example.com/page')
        True
        >>> validate_target_url('ftp://example.com')
        False
        >>> validate_target_url('/relative/path')
        False
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        components = urllib.parse.urlparse(url)
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(components.netloc)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 instead of crashing the Lambda

    When running locally the exception is re-raised so it shows up in the
    SAM console.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: Any, *args, **kwargs) -> dict:
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': ErrorCode.UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=ErrorCode.UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
