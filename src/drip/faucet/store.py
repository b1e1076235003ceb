"""Persisted faucet state: mining records and the published faucet key."""

import logging

from drip.store import KVStore

from .errors import InvalidAddress
from .types import FAUCET_STORE_KEY, FaucetKey, MiningRecord

logger = logging.getLogger(__name__)


def _record_key(address: str) -> bytes:
    key = address.encode("utf-8")
    if key == FAUCET_STORE_KEY:
        raise InvalidAddress(f"{address} is a reserved store key")
    return key


class MiningRecordStore:
    """Mining records keyed by raw address bytes.

    Parameters
    ----------
    kv : KVStore
        Store committed together with the enclosing state transition.
    """

    def __init__(self, kv: KVStore):
        self._kv = kv

    def get(self, address: str) -> MiningRecord:
        """Return the stored record, or a zero record if none exists."""
        raw = self._kv.get(_record_key(address)) if address else None
        if raw is None:
            return MiningRecord.empty(address)
        return MiningRecord.model_validate_json(raw)

    def set(self, record: MiningRecord) -> None:
        """Persist ``record``; zero-tally or address-less records are skipped."""
        if not record.minter or record.tally == 0:
            return
        self._kv.set(_record_key(record.minter), record.model_dump_json().encode("utf-8"))

    def has(self, address: str) -> bool:
        if not address:
            return False
        return self._kv.has(_record_key(address))


class FaucetKeyRegistry:
    """Singleton faucet key stored under a reserved key.

    Parameters
    ----------
    kv : KVStore
        Store shared with the mining records.
    """

    def __init__(self, kv: KVStore):
        self._kv = kv

    def publish(self, sender: str, armor: str) -> None:
        """Replace the published key with ``armor``."""
        key = FaucetKey(armor=armor)
        self._kv.set(FAUCET_STORE_KEY, key.model_dump_json().encode("utf-8"))
        logger.info("Faucet key published", extra={"sender": sender})

    def fetch(self) -> FaucetKey:
        """Return the published key; empty armor if never published."""
        raw = self._kv.get(FAUCET_STORE_KEY)
        if raw is None:
            return FaucetKey()
        return FaucetKey.model_validate_json(raw)

    def has_published_key(self) -> bool:
        return self.fetch().published
