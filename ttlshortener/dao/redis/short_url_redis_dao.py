"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO for CRUD-like
operations with ShortURLModel instances.

Responsibilities:
    - Reserve shortcodes atomically (insert only if absent) together with their TTL;
    - Retrieve short URLs and slide their TTL forward on every read;
    - Delete short URLs, reporting whether the link was actually removed;
    - Translate Redis failures into DAO exceptions.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from ttlshortener.models import ShortURLModel
    >>> from ttlshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="aB1cD2eF"
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> retrieved = dao.get("aB1cD2eF")
    >>> retrieved.target
    'https://example.com/page'
    >>> retrieved.expires_at
    <datetime>

    >>> dao.delete("aB1cD2eF")
    <ShortURLRedisDAO>
"""

import logging
from datetime import datetime, timedelta, UTC

import redis
from beartype import beartype

from ttlshortener.constants import TTL
from ttlshortener.models import ShortURLModel
from ttlshortener.exceptions import BadConfigurationError
from ttlshortener.dao.base import ShortURLBaseDAO
from ttlshortener.dao.redis.mixins import RedisClientMixin
from ttlshortener.dao.redis.helpers import handle_redis_errors
from ttlshortener.dao.helpers import respect_deadline, deadline_passed, require_non_empty
from ttlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


logger = logging.getLogger(__name__)


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.
    Each mapping is a single string key holding the target URL with a Redis-managed
    expiry, so atomicity comes from Redis' own SET NX and DEL commands.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        ttl (int):
            Seconds a mapping lives without being read.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            SET <key> <target> NX EX <ttl>.
            Raises ShortURLAlreadyExistsError when the shortcode is taken.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            GET <key>, then best-effort EXPIRE <key> <ttl>.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.

        delete(shortcode: str, **kwargs) -> ShortURLRedisDAO:
            DEL <key>.
            Raises ShortURLNotFoundError when nothing was deleted.

        exists(shortcode: str, **kwargs) -> bool:
            EXISTS <key>.

        All methods raise DataStoreError on Redis failures and DeadlineExceededError
        when called after their deadline.

    Example:
        >>> dao = ShortURLRedisDAO(redis_host="localhost", prefix="shortener:test", ttl=60)
        >>> dao.insert(ShortURLModel(target="https://example.com", shortcode="aB1cD2eF"))
        <ShortURLRedisDAO>
        >>> dao.get("aB1cD2eF").target
        'https://example.com'
    """

    def __init__(self, *args, ttl: int | None = None, **kwargs):
        ttl = TTL.THREE_HOURS if ttl is None else int(ttl)
        if ttl <= 0:
            raise BadConfigurationError(f'Short URL TTL must be a positive number of seconds (given value: {ttl}).')

        self.ttl = ttl
        super().__init__(*args, **kwargs)

    @handle_redis_errors
    @respect_deadline
    @beartype
    def insert(self, short_url: ShortURLModel, *, deadline: float | None = None, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis only if its shortcode is free

        NOTE: Existence check, write and expiry happen in one SET NX EX command.
              Two concurrent inserts of the same shortcode can therefore never
              both succeed, and a stored link can never lack its TTL:

              (lambda 1): SET <app>:links:<shortcode> <url 1> NX EX <ttl>  => OK
              (lambda 2): SET <app>:links:<shortcode> <url 2> NX EX <ttl>  => (nil)

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            deadline (float | None):
                Absolute monotonic deadline for the operation.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            InvalidArgumentError:
                If the shortcode or target is empty.
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If a Redis issue occurs.
        """
        require_non_empty(shortcode=short_url.shortcode, target=short_url.target)

        link_key = self.keys.link_key(short_url.shortcode)
        created = self.redis.set(link_key, short_url.target, nx=True, ex=self.ttl)
        if not created:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
        return self

    @handle_redis_errors
    @respect_deadline
    @beartype
    def get(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode and refresh its TTL

        The TTL refresh is best-effort: once the target URL was read, a failed
        EXPIRE is logged and the read still succeeds (with `expires_at=None`).

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            deadline (float | None):
                Absolute monotonic deadline for the operation.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance.

        Raises:
            InvalidArgumentError:
                If the shortcode is empty.
            ShortURLNotFoundError:
                If the short URL does not exist (or already expired) in Redis.
            DataStoreError:
                If Redis connectivity issues occur while reading.

        Example:
            >>> dao.get('aB1cD2eF')
            ShortURLModel(target='https://example.com', shortcode='aB1cD2eF', expires_at=...)
        """
        require_non_empty(shortcode=shortcode)

        link_key = self.keys.link_key(shortcode)
        target = self.redis.get(link_key)
        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        if isinstance(target, bytes):
            target = target.decode('utf-8')

        return ShortURLModel(
            target=target,
            shortcode=shortcode,
            expires_at=self._refresh_ttl(link_key, shortcode, deadline),
        )

    @handle_redis_errors
    @respect_deadline
    @beartype
    def delete(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> 'ShortURLRedisDAO':
        """Delete a short URL mapping from Redis

        DEL reports how many keys it removed, so out of many concurrent deletes
        of the same shortcode exactly one sees 1 and the rest see 0.

        Raises:
            InvalidArgumentError:
                If the shortcode is empty.
            ShortURLNotFoundError:
                If the short URL was already absent or expired.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        require_non_empty(shortcode=shortcode)

        removed = self.redis.delete(self.keys.link_key(shortcode))
        if not removed:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return self

    @handle_redis_errors
    @respect_deadline
    @beartype
    def exists(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> bool:
        require_non_empty(shortcode=shortcode)
        return self.redis.exists(self.keys.link_key(shortcode)) > 0

    def _refresh_ttl(self, link_key: str, shortcode: str, deadline: float | None) -> datetime | None:
        """Slide the link's expiry forward to a full TTL, never failing the caller

        Returns:
            datetime | None:
                New expiry moment, or None if the refresh did not happen.
        """
        if deadline_passed(deadline):
            logger.warning('Skipped TTL refresh of short URL: deadline exceeded.', extra={'shortcode': shortcode})
            return None

        try:
            refreshed = self.redis.expire(link_key, self.ttl)
        except redis.exceptions.RedisError:
            logger.warning('Failed to refresh TTL of short URL.', extra={'shortcode': shortcode}, exc_info=True)
            return None

        if not refreshed:
            # Expired between GET and EXPIRE; the value was still read before expiry.
            logger.info('Short URL expired before its TTL could be refreshed.', extra={'shortcode': shortcode})
            return None

        return datetime.now(UTC) + timedelta(seconds=self.ttl)
