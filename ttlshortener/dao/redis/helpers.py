import functools
from typing import Any
from collections.abc import Callable

import redis

from ttlshortener.dao.exceptions import DataStoreError


__all__ = ['handle_redis_errors', 'redis_location']


def redis_location(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client for error messages"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_errors[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Connection problems, socket timeouts and server-side errors all mean
    the data store is unavailable for the current operation.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_errors
        ... def get(self, shortcode):
        ...     return self.redis.get(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.TimeoutError as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} timed out.') from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} failed: {e}') from e

    return wrapper
