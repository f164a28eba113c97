"""Helpers shared by all DAO implementations.

Functions:
    deadline_after(seconds: float) -> float
        Compute an absolute deadline `seconds` from now on the monotonic clock.
    deadline_passed(deadline: float | None) -> bool
        True if the deadline is set and already in the past.
    respect_deadline(method) -> Callable
        Decorator: abort a DAO method before it touches the data store once
        its `deadline` keyword argument has passed.
    require_non_empty(**values: str) -> None
        Reject empty shortcodes or targets before they reach the data store.

Deadlines are absolute `time.monotonic()` values so one deadline can be handed
down unchanged through several store operations (e.g. collision retries).
"""

import time
import functools
from typing import Any
from collections.abc import Callable

from ttlshortener.dao.exceptions import DeadlineExceededError, InvalidArgumentError


__all__ = ['deadline_after', 'deadline_passed', 'respect_deadline', 'require_non_empty']


def deadline_after(seconds: float) -> float:
    return time.monotonic() + seconds


def deadline_passed(deadline: float | None) -> bool:
    return deadline is not None and time.monotonic() >= deadline


def respect_deadline[F: Callable[..., Any]](method: F) -> F:
    """Wrap DAO methods to honor the caller's `deadline` keyword argument

    The check runs before the wrapped method issues any data store command,
    so an expired operation has no effect at all.

    Raises:
        DeadlineExceededError:
            If `deadline` was given and has already passed.

    Example:
        >>> @respect_deadline
        ... def get(self, shortcode, *, deadline=None):
        ...     return self.redis.get(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if deadline_passed(kwargs.get('deadline')):
            raise DeadlineExceededError(f'Deadline exceeded before {method.__name__}() reached the data store.')
        return method(self, *args, **kwargs)

    return wrapper


def require_non_empty(**values: str) -> None:
    """Raise InvalidArgumentError naming every empty argument

    Example:
        >>> require_non_empty(shortcode='aB1cD2eF', target='')
        InvalidArgumentError: Empty argument(s) given to the data store: 'target'
    """
    empty = [name for name, value in values.items() if not value]
    if empty:
        empty_list = ', '.join(f"'{name}'" for name in empty)
        raise InvalidArgumentError(f'Empty argument(s) given to the data store: {empty_list}')
