"""In-process implementation of ShortURLBaseDAO

Keeps short URL mappings in a dictionary with wall-clock expiry. It mirrors the
Redis DAO's contract exactly (insert-if-absent, sliding TTL on read, delete
reporting removal) and is meant for local runs and tests which need the real
race semantics without a Redis server.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving ShortURLModel in process memory.

Example:
    >>> dao = ShortURLMemoryDAO(ttl=60)
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='aB1cD2eF'))
    <ShortURLMemoryDAO>
    >>> dao.get('aB1cD2eF').target
    'https://example.com'
"""

import time
import threading
from datetime import datetime, UTC

from beartype import beartype

from ttlshortener.constants import TTL
from ttlshortener.models import ShortURLModel
from ttlshortener.exceptions import BadConfigurationError
from ttlshortener.dao.base import ShortURLBaseDAO
from ttlshortener.dao.helpers import respect_deadline, require_non_empty
from ttlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Dictionary-backed DAO with the same atomicity guarantees as Redis

    Every primitive runs under one lock, which plays the role of Redis'
    single-threaded command execution. Expired entries are purged lazily
    whenever they are looked at.

    Attributes:
        ttl (int):
            Seconds a mapping lives without being read.
    """

    def __init__(self, ttl: int | None = None):
        ttl = TTL.THREE_HOURS if ttl is None else int(ttl)
        if ttl <= 0:
            raise BadConfigurationError(f'Short URL TTL must be a positive number of seconds (given value: {ttl}).')

        self.ttl = ttl
        self._links: dict[str, tuple[str, float]] = {}  # shortcode -> (target, expires at epoch seconds)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._links)

    @respect_deadline
    @beartype
    def insert(self, short_url: ShortURLModel, *, deadline: float | None = None, **kwargs) -> 'ShortURLMemoryDAO':
        require_non_empty(shortcode=short_url.shortcode, target=short_url.target)

        with self._lock:
            if self._lookup(short_url.shortcode) is not None:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self._links[short_url.shortcode] = (short_url.target, time.time() + self.ttl)
        return self

    @respect_deadline
    @beartype
    def get(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> ShortURLModel:
        require_non_empty(shortcode=shortcode)

        with self._lock:
            entry = self._lookup(shortcode)
            if entry is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            target, _ = entry
            expires_at = time.time() + self.ttl
            self._links[shortcode] = (target, expires_at)

        return ShortURLModel(
            target=target,
            shortcode=shortcode,
            expires_at=datetime.fromtimestamp(expires_at, tz=UTC),
        )

    @respect_deadline
    @beartype
    def delete(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> 'ShortURLMemoryDAO':
        require_non_empty(shortcode=shortcode)

        with self._lock:
            if self._lookup(shortcode) is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            del self._links[shortcode]
        return self

    @respect_deadline
    @beartype
    def exists(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> bool:
        require_non_empty(shortcode=shortcode)

        with self._lock:
            return self._lookup(shortcode) is not None

    def _lookup(self, shortcode: str) -> tuple[str, float] | None:
        # caller must hold self._lock
        entry = self._links.get(shortcode)
        if entry is not None and entry[1] <= time.time():
            del self._links[shortcode]
            return None
        return entry

    def _purge_expired(self) -> None:
        now = time.time()
        for shortcode in [code for code, (_, expires_at) in self._links.items() if expires_at <= now]:
            del self._links[shortcode]
