"""Reserve a fresh shortcode for a target URL

Shortcodes are random, so a freshly generated one may already be taken.
The data store's insert-if-absent rejects such collisions and the
Shortener retries with a new candidate, up to MAX_SHORTEN_ATTEMPTS times.
Only collisions are retried: randomness failures, store outages and
expired deadlines fail the request immediately.

State machine (ShortenAttempts):

    ATTEMPTING --begin()--> generate + insert
        ok                               --> DONE
        collision, attempts left         --> ATTEMPTING
        collision, no attempts left      --> EXHAUSTED  (ShortcodeExhaustedError)
        any other error                  --> FAILED     (error re-raised)

Example:
    >>> from ttlshortener.dao.memory import ShortURLMemoryDAO
    >>> shortener = Shortener(ShortURLMemoryDAO())
    >>> short_url = shortener.shorten('https://example.com')
    >>> short_url.shortcode
    'q3ZkR0bA'
"""

import logging
from enum import StrEnum
from dataclasses import dataclass, field
from collections.abc import Callable

from ttlshortener.constants import MAX_SHORTEN_ATTEMPTS
from ttlshortener.models import ShortURLModel
from ttlshortener.exceptions import ShortcodeExhaustedError
from ttlshortener.dao.base import ShortURLBaseDAO
from ttlshortener.dao.exceptions import ShortURLAlreadyExistsError
from ttlshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class ShortenState(StrEnum):
    ATTEMPTING = 'ATTEMPTING'
    DONE = 'DONE'
    EXHAUSTED = 'EXHAUSTED'
    FAILED = 'FAILED'


@dataclass
class ShortenAttempts:
    """Progress of reserving one shortcode

    Attributes:
        max_attempts (int):
            Upper bound on insert attempts.
        attempt (int):
            Number of attempts started so far.
        state (ShortenState):
            Current state, see module docstring.
        candidates (list[str]):
            Shortcodes tried, in order.
        last_error (Exception | None):
            Error that ended the last unsuccessful attempt.
        short_url (ShortURLModel | None):
            Stored mapping once DONE.
    """

    max_attempts: int = MAX_SHORTEN_ATTEMPTS
    attempt: int = 0
    state: ShortenState = ShortenState.ATTEMPTING
    candidates: list[str] = field(default_factory=list)
    last_error: Exception | None = None
    short_url: ShortURLModel | None = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1 (given value: {self.max_attempts}).')

    @property
    def finished(self) -> bool:
        return self.state is not ShortenState.ATTEMPTING

    def begin(self) -> int:
        if self.finished:
            raise RuntimeError(f'Cannot start a new attempt in state {self.state}.')
        self.attempt += 1
        return self.attempt

    def tried(self, shortcode: str) -> None:
        self.candidates.append(shortcode)

    def succeeded(self, short_url: ShortURLModel) -> None:
        self.short_url = short_url
        self.state = ShortenState.DONE

    def collided(self, error: ShortURLAlreadyExistsError) -> None:
        self.last_error = error
        if self.attempt >= self.max_attempts:
            self.state = ShortenState.EXHAUSTED

    def failed(self, error: Exception) -> None:
        self.last_error = error
        self.state = ShortenState.FAILED


class Shortener:
    """Create short URLs with bounded collision retries

    Attributes:
        dao (ShortURLBaseDAO):
            Data store providing insert-if-absent.
        generate (Callable[[], str]):
            Candidate shortcode source, `generate_shortcode` by default.
        max_attempts (int):
            Insert attempts before giving up with ShortcodeExhaustedError.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        generate: Callable[[], str] = generate_shortcode,
        max_attempts: int = MAX_SHORTEN_ATTEMPTS,
    ):
        self.dao = dao
        self.generate = generate
        self.max_attempts = max_attempts

    def shorten(self, target: str, *, deadline: float | None = None) -> ShortURLModel:
        """Store `target` under a newly reserved shortcode

        Args:
            target (str):
                Already validated absolute http(s) URL.
            deadline (float | None):
                Absolute monotonic deadline passed to every insert.

        Returns:
            ShortURLModel: The stored mapping.

        Raises:
            ShortcodeExhaustedError:
                If every attempt collided with an existing shortcode.
            RandomnessUnavailableError:
                If no candidate shortcode could be generated.
            DataStoreError, DeadlineExceededError, InvalidArgumentError:
                Propagated from the data store without retrying.
        """
        attempts = ShortenAttempts(max_attempts=self.max_attempts)

        while not attempts.finished:
            attempt = attempts.begin()
            try:
                shortcode = self.generate()
                attempts.tried(shortcode)
                short_url = ShortURLModel(target=target, shortcode=shortcode)
                self.dao.insert(short_url, deadline=deadline)
            except ShortURLAlreadyExistsError as e:
                attempts.collided(e)
                logger.info(
                    'Shortcode collision, generating a new candidate.',
                    extra={'shortcode': shortcode, 'attempt': attempt, 'maxAttempts': attempts.max_attempts},
                )
            except Exception as e:
                attempts.failed(e)
                raise
            else:
                attempts.succeeded(short_url)

        if attempts.state is ShortenState.EXHAUSTED:
            logger.error(
                'Every shortcode candidate collided with an existing short URL.',
                extra={'candidates': attempts.candidates, 'attempts': attempts.attempt},
            )
            raise ShortcodeExhaustedError(
                f'Failed to reserve a unique shortcode after {attempts.attempt} attempts.',
                attempts=attempts,
            )

        return attempts.short_url
