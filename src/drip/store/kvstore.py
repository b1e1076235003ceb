"""Byte-oriented key-value stores.

The ledger commits every state transition through a CacheKVStore branch:
writes become visible in the parent only when the branch is written, and
vanish when it is discarded.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class KVStore(ABC):
    """Abstract byte-oriented key-value store."""

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under key, or None if absent."""
        ...

    @abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        """Insert or replace the value stored under key."""
        ...

    @abstractmethod
    def has(self, key: bytes) -> bool:
        """Return True if key is present."""
        ...

    @abstractmethod
    def delete(self, key: bytes) -> None:
        """Remove key if present."""
        ...

    def apply_batch(self, writes: Mapping[bytes, bytes | None]) -> None:
        """Apply a batch of writes; a None value deletes the key.

        Backends with native transactions override this to apply the
        batch atomically.
        """
        for key, value in writes.items():
            if value is None:
                self.delete(key)
            else:
                self.set(key, value)

    def ping(self) -> bool:
        """Return True if the backing storage is reachable."""
        return True


class MemoryKVStore(KVStore):
    """In-memory store for development and tests."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._data[key] = value

    def has(self, key: bytes) -> bool:
        return key in self._data

    def delete(self, key: bytes) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class CacheKVStore(KVStore):
    """Write-buffering branch of a parent store.

    Parameters
    ----------
    parent : KVStore
        Store that receives the buffered writes on ``write()``.
    """

    def __init__(self, parent: KVStore):
        self._parent = parent
        self._writes: dict[bytes, bytes | None] = {}

    @property
    def dirty(self) -> bool:
        """True if the branch holds uncommitted writes."""
        return bool(self._writes)

    def get(self, key: bytes) -> bytes | None:
        if key in self._writes:
            return self._writes[key]
        return self._parent.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._writes[key] = value

    def has(self, key: bytes) -> bool:
        if key in self._writes:
            return self._writes[key] is not None
        return self._parent.has(key)

    def delete(self, key: bytes) -> None:
        self._writes[key] = None

    def ping(self) -> bool:
        return self._parent.ping()

    def write(self) -> None:
        """Flush buffered writes to the parent in one batch."""
        if not self._writes:
            return
        self._parent.apply_batch(self._writes)
        logger.debug("Cache branch written", extra={"writes": len(self._writes)})
        self._writes = {}

    def discard(self) -> None:
        """Drop buffered writes without touching the parent."""
        if self._writes:
            logger.debug("Cache branch discarded", extra={"writes": len(self._writes)})
        self._writes = {}


@contextmanager
def transaction(parent: KVStore) -> Iterator[CacheKVStore]:
    """Run a state transition against a branch of ``parent``.

    The branch is written when the block exits normally and discarded
    when it raises.
    """
    branch = CacheKVStore(parent)
    try:
        yield branch
    except BaseException:
        branch.discard()
        raise
    branch.write()
