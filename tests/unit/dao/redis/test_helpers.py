"""Unit tests for the handle_redis_errors decorator.

This test suite verifies that the decorator translates Redis failures into
DataStoreError and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Redis error handling
       - Ensures connection errors, timeouts and server errors become DataStoreError.
       - Ensures non-Redis exceptions pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import pytest
import redis
from unittest.mock import MagicMock

from ttlshortener.dao.redis.helpers import handle_redis_errors, redis_location
from ttlshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError


class DummyDAO:
    def __init__(self, error=None):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }
        self.error = error

    @handle_redis_errors
    def call(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().call() == 'OK'


def test_redis_location():
    assert redis_location(DummyDAO().redis) == 'localhost:6379/0'


# -------------------------------
# 2. Redis error handling
# -------------------------------


@pytest.mark.parametrize(
    'error, message',
    [
        (redis.exceptions.ConnectionError('Cannot connect'), "Can't connect to Redis at localhost:6379/0."),
        (redis.exceptions.TimeoutError('Timeout reading from socket'), 'Redis at localhost:6379/0 timed out.'),
        (redis.exceptions.ResponseError('READONLY replica'), 'Redis at localhost:6379/0 failed: READONLY replica'),
    ],
)
def test_decorator_transforms_redis_errors(error, message):
    """Ensure Redis errors are caught and re-raised as DataStoreError."""
    with pytest.raises(DataStoreError, match=message) as exc_info:
        DummyDAO(error).call()
    assert exc_info.value.__cause__ is error


def test_decorator_passes_through_dao_errors():
    """Ensure DAO errors raised by the wrapped method are not translated."""
    with pytest.raises(ShortURLNotFoundError):
        DummyDAO(ShortURLNotFoundError('missing')).call()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_errors
    def sample_function(self):
        """This is a sample docstring."""

    assert sample_function.__name__ == 'sample_function'
    assert sample_function.__doc__ == 'This is a sample docstring.'
