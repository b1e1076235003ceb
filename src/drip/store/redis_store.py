"""Redis-backed key-value store for DRIP."""

import logging
from collections.abc import Mapping

from redis import Redis

from .kvstore import KVStore

logger = logging.getLogger(__name__)


class RedisKVStore(KVStore):
    """Key-value store persisted in Redis.

    All keys are namespaced under ``prefix`` so several modules can share
    one database.

    Parameters
    ----------
    client : Redis
        Redis client. Must return raw bytes (``decode_responses=False``).
    prefix : str
        Namespace prepended to every key.
    """

    def __init__(self, client: Redis, prefix: str = "drip:faucet:"):
        self._redis = client
        self._prefix = prefix.encode("utf-8")

    @classmethod
    def from_url(cls, redis_url: str, prefix: str = "drip:faucet:") -> "RedisKVStore":
        """Connect to Redis and verify the connection.

        Parameters
        ----------
        redis_url : str
            Redis connection URL.
        prefix : str
            Namespace prepended to every key.

        Returns
        -------
        RedisKVStore
            Connected store.
        """
        client = Redis.from_url(redis_url, decode_responses=False)
        client.ping()
        logger.info("Redis connected for faucet state", extra={"url": redis_url})
        return cls(client, prefix=prefix)

    def _key(self, key: bytes) -> bytes:
        return self._prefix + key

    def get(self, key: bytes) -> bytes | None:
        return self._redis.get(self._key(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._redis.set(self._key(key), value)

    def has(self, key: bytes) -> bool:
        return bool(self._redis.exists(self._key(key)))

    def delete(self, key: bytes) -> None:
        self._redis.delete(self._key(key))

    def apply_batch(self, writes: Mapping[bytes, bytes | None]) -> None:
        """Apply the batch in a single MULTI/EXEC transaction."""
        pipe = self._redis.pipeline(transaction=True)
        for key, value in writes.items():
            if value is None:
                pipe.delete(self._key(key))
            else:
                pipe.set(self._key(key), value)
        pipe.execute()

    def ping(self) -> bool:
        try:
            return bool(self._redis.ping())
        except Exception as e:
            logger.warning("Redis ping failed", extra={"error": str(e)})
            return False
