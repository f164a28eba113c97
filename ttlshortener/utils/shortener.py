"""Shortcode generation and validation utilities

This module produces random, fixed-length Base62 shortcodes and validates
shortcodes received from clients.

Functions:
    generate_shortcode(randbytes=None) -> str:
        Generate an 8-character random Base62 shortcode.
    validate_shortcode(candidate) -> bool:
        Check that a string is a syntactically valid shortcode.

Example:
    >>> from ttlshortener.utils import generate_shortcode, validate_shortcode
    >>> shortcode = generate_shortcode()
    >>> shortcode
    'q3ZkR0bA'
    >>> validate_shortcode(shortcode)
    True
    >>> validate_shortcode('abc-123_')
    False
"""

import string
import secrets
from typing import Any

from ttlshortener.types import RandomBytesSource
from ttlshortener.exceptions import RandomnessUnavailableError


ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 uppercase + 26 lowercase = 62
SHORTCODE_LENGTH = 8
RANDOM_BYTES = 6  # 48 bits of entropy, 62**8 needs ~47.6 bits

_ALPHABET_SET = frozenset(ALPHABET)


def generate_shortcode(randbytes: RandomBytesSource | None = None) -> str:
    """Generate a random, fixed-length Base62 shortcode.

    Draws 48 bits from a cryptographically secure source, reads them as an
    unsigned big-endian integer and emits exactly SHORTCODE_LENGTH Base62
    digits, least significant digit first. Leading zero digits are kept
    ('0' characters), so the output length never varies.

    Args:
        randbytes (Callable[[int], bytes], optional):
            Source of random bytes, called once with RANDOM_BYTES.
            Defaults to `secrets.token_bytes`. Tests inject deterministic
            or failing sources here.

    Returns:
        str: An 8-character string over [0-9A-Za-z].

    Raises:
        RandomnessUnavailableError:
            If the random source fails or returns fewer than RANDOM_BYTES bytes.

    Example:
        >>> generate_shortcode(lambda n: bytes(n))
        '00000000'
        >>> generate_shortcode(lambda n: b'\\x00' * (n - 1) + b'\\x3d')
        'z0000000'

    NOTE:
        - Uniqueness is not guaranteed, only overwhelmingly likely across
          ~3.5e14 combinations. Collisions are caught by the data store's
          insert-if-absent and retried by the caller.
    """
    randbytes = randbytes or secrets.token_bytes

    try:
        data = randbytes(RANDOM_BYTES)
    except (OSError, NotImplementedError) as e:
        raise RandomnessUnavailableError('Secure random source failed to supply entropy.') from e

    if len(data) < RANDOM_BYTES:
        raise RandomnessUnavailableError(f'Secure random source returned {len(data)} of {RANDOM_BYTES} requested bytes.')

    number = int.from_bytes(data[:RANDOM_BYTES], 'big')
    digits = []
    for _ in range(SHORTCODE_LENGTH):
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(digits)


def validate_shortcode(candidate: Any) -> bool:
    """Check whether `candidate` is a syntactically valid shortcode.

    Valid means exactly SHORTCODE_LENGTH characters, each from ALPHABET.
    There is no checksum; a valid shortcode may still not exist in the store.

    Example:
        >>> validate_shortcode('aB1cD2eF')
        True
        >>> validate_shortcode('abc123')
        False
    """
    return isinstance(candidate, str) and len(candidate) == SHORTCODE_LENGTH and all(c in _ALPHABET_SET for c in candidate)
