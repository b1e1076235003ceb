"""Key-value storage backends for DRIP."""

from .kvstore import CacheKVStore, KVStore, MemoryKVStore, transaction
from .redis_store import RedisKVStore

__all__ = [
    "CacheKVStore",
    "KVStore",
    "MemoryKVStore",
    "RedisKVStore",
    "transaction",
]
