"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory).

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting ShortURLModel objects.
    - Standardize error handling across multiple data store implementations.
    - Guarantee insert-if-absent semantics and TTL-based expiry with sliding refresh.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from ttlshortener.models import ShortURLModel
        >>> from ttlshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="aB1cD2eF",
        ... )
        >>> dao.insert(short_url)

        >>> retrieved = dao.get("aB1cD2eF")
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> dao.delete("aB1cD2eF")
"""

from abc import ABC, abstractmethod

from ttlshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Every method accepts a keyword-only `deadline` (absolute `time.monotonic()`
    value or None). Once it has passed, the method raises DeadlineExceededError
    without touching the data store.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel only if its shortcode is absent, with the default TTL.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.
            Raises InvalidArgumentError on an empty shortcode or target.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel by shortcode and refresh its TTL.
            Raises ShortURLNotFoundError if the entry does not exist or expired.
            Raises DataStoreError on connection or read failure.

        delete(shortcode: str, **kwargs) -> ShortURLBaseDAO:
            Remove a ShortURLModel.
            Raises ShortURLNotFoundError if the entry was already absent or expired.
            Raises DataStoreError on connection or write failure.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is currently taken, without refreshing its TTL.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLMemoryDAO) must extend this class and implement all
        abstract methods. Concurrent inserts of the same shortcode must
        let exactly one caller win, and concurrent deletes of the same
        shortcode must report success to exactly one caller.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, *, deadline: float | None = None, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store if its shortcode is free.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            deadline (float | None):
                Absolute monotonic deadline for the operation.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists

            InvalidArgumentError:
                If the shortcode or target is empty.

            DeadlineExceededError:
                If the deadline passed before the insert was issued.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        A successful read resets the entry's TTL to the full duration.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be retrieved.

            deadline (float | None):
                Absolute monotonic deadline for the operation.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DeadlineExceededError:
                If the deadline passed before the read was issued.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> 'ShortURLBaseDAO':
        """Delete a ShortURLModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be deleted.

            deadline (float | None):
                Absolute monotonic deadline for the operation.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DeadlineExceededError:
                If the deadline passed before the delete was issued.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, *, deadline: float | None = None, **kwargs) -> bool:
        """Check whether a shortcode is currently stored (TTL is not refreshed)."""
        pass
