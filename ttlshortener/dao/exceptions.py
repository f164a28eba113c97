"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    InvalidArgumentError:
        Raised when an empty shortcode or target reaches the data store layer.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store (absent or expired).

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    DeadlineExceededError:
        Raised when an operation is attempted after its caller's deadline has passed.

Example:
    >>> from ttlshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'aB1cD2eF' not found.")
    Traceback (most recent call last):
        ...
    ttlshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'aB1cD2eF' not found.
"""

from ttlshortener.exceptions import TTLShortenerError


class DAOError(TTLShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class InvalidArgumentError(DAOError, ValueError):
    """Exception raised when an empty shortcode or target URL reaches the data store layer.

    Input validation belongs to the request handlers, so this indicates a bug upstream.
    """

    error_code = 'dao:invalid_argument_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class DeadlineExceededError(DAOError):
    """Exception raised when an operation's deadline passed before it was issued."""

    error_code = 'dao:deadline_exceeded_error'
