"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    request_deadline(context) -> float | None:
        Absolute monotonic deadline for data store operations of this invocation.

Example:
    >>> from ttlshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os
import time

from ttlshortener.types import LambdaContext
from ttlshortener.constants import ENV, DEADLINE_MARGIN_MS


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def request_deadline(context: LambdaContext) -> float | None:
    """Derive a data store deadline from the Lambda's remaining invocation time

    A small safety margin is kept so the handler can still respond after
    a store operation gets aborted.

    Returns:
        float | None:
            Absolute `time.monotonic()` deadline, or None if the context
            doesn't expose `get_remaining_time_in_millis()` (tests, scripts).

    Example:
        >>> request_deadline(context)  # 3000 ms remaining
        1234.9  # time.monotonic() + 2.9
    """
    remaining = getattr(context, 'get_remaining_time_in_millis', None)
    if not callable(remaining):
        return None
    return time.monotonic() + max(remaining() - DEADLINE_MARGIN_MS, 0) / 1000
