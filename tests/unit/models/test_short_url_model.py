"""Unit tests for the ShortURLModel dataclass in models.py.

This test suite verifies the integrity, immutability, and equality behavior
of the ShortURLModel, which represents a shortened URL mapping with an
optional expiration timestamp.

Test coverage includes:

1. Model creation and field validation
   - Ensures instances can be created with valid field types and values.

2. Optional expires_at field
   - Verifies that expires_at can be omitted and defaults to None.

3. Equality semantics
   - Confirms that models with identical data compare equal.

4. Inequality semantics
   - Ensures that differing field values (URL, short code, or expiration)
     produce non-equal instances.

5. Immutability
   - Verifies that all fields are frozen and cannot be reassigned after
     object creation.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, UTC

import pytest

from ttlshortener.models import ShortURLModel


# -------------------------------------------------
# 1. Model creation and field type validation
# -------------------------------------------------

def test_valid_short_url_model_creation():
    """Ensure ShortURLModel can be created with valid data and types."""
    original_url = "https://example.com/article/123"
    shortcode = "aB1cD2eF"
    expires_at = datetime(2026, 1, 1, 3, 0, 0, tzinfo=UTC)

    short_url = ShortURLModel(
        target=original_url,
        shortcode=shortcode,
        expires_at=expires_at,
    )

    assert isinstance(short_url, ShortURLModel)
    assert short_url.target == original_url
    assert short_url.shortcode == shortcode
    assert short_url.expires_at == expires_at


# -------------------------------------------------
# 2. Optional fields
# -------------------------------------------------

def test_expires_at_is_optional():
    """Verify that expires_at can be omitted and defaults to None."""
    short_url = ShortURLModel(
        target="https://example.com/article/123",
        shortcode="aB1cD2eF",
    )

    assert short_url.expires_at is None


# -------------------------------------------------
# 3. Equality semantics
# -------------------------------------------------

def test_short_url_model_equality():
    """Models with identical data should compare equal."""
    expires_at = datetime(2026, 1, 1, 3, 0, 0, tzinfo=UTC)

    short_url1 = ShortURLModel(target="https://example.com/article/123", shortcode="aB1cD2eF", expires_at=expires_at)
    short_url2 = ShortURLModel(target="https://example.com/article/123", shortcode="aB1cD2eF", expires_at=expires_at)

    assert short_url1 == short_url2
    assert hash(short_url1) == hash(short_url2)


# -------------------------------------------------
# 4. Inequality semantics
# -------------------------------------------------

@pytest.mark.parametrize(
    'right_url_parameters',
    [
        {'target': 'https://example.com/article/456', 'shortcode': 'aB1cD2eF', 'expires_at': datetime(2026, 1, 1, tzinfo=UTC)},
        {'target': 'https://example.com/article/123', 'shortcode': 'zzzzzzzz', 'expires_at': datetime(2026, 1, 1, tzinfo=UTC)},
        {'target': 'https://example.com/article/123', 'shortcode': 'aB1cD2eF', 'expires_at': datetime(2027, 1, 1, tzinfo=UTC)},
        {'target': 'https://example.com/article/123', 'shortcode': 'aB1cD2eF'},
    ],
)
def test_short_url_model_inequality(right_url_parameters):
    """Models with differing data should not compare equal."""
    left_url = ShortURLModel(
        target="https://example.com/article/123",
        shortcode="aB1cD2eF",
        expires_at=datetime(2026, 1, 1, tzinfo=UTC),
    )

    assert left_url != ShortURLModel(**right_url_parameters)


# -------------------------------------------------
# 5. Immutability
# -------------------------------------------------

@pytest.mark.parametrize(
    'field, new_value',
    [
        ('target', 'https://example.com/article/456'),
        ('shortcode', 'zzzzzzzz'),
        ('expires_at', datetime(2027, 1, 1, tzinfo=UTC)),
    ],
)
def test_short_url_model_immutability(field, new_value):
    """Attempting to modify fields should raise FrozenInstanceError."""
    short_url = ShortURLModel(target='https://example.com/article/123', shortcode='aB1cD2eF')

    with pytest.raises(FrozenInstanceError):
        setattr(short_url, field, new_value)
