"""Faucet key bootstrap between operators.

Operator A exports its local faucet key and publishes it. Operator B
fetches the published key and imports it into its own key store, unless it
already holds a key under the faucet name.
"""

import logging
from collections.abc import Callable

from drip.core.keyring import KeyInfo, KeyStore

from .errors import KeyAlreadyExists, KeyNotPublished
from .types import MODULE_NAME, FaucetKey, MsgFaucetKey
from .validation import validate_faucet_key

logger = logging.getLogger(__name__)


class KeyBootstrap:
    """Publish and import the shared faucet key.

    Parameters
    ----------
    keystore : KeyStore
        Operator's local key store.
    key_name : str
        Local name of the faucet key.
    """

    def __init__(self, keystore: KeyStore, key_name: str = MODULE_NAME):
        self._keystore = keystore
        self._key_name = key_name

    def build_publish_msg(self, from_name: str) -> MsgFaucetKey:
        """Export the key ``from_name`` as a publish message.

        Raises
        ------
        FileNotFoundError
            If ``from_name`` is not in the key store.
        EmptyKeyMaterial
            If the exported armor is empty.
        """
        info = self._keystore.get(from_name)
        if info is None:
            raise FileNotFoundError(f"Key not found: {from_name}")
        armor = self._keystore.export(from_name)
        msg = MsgFaucetKey(sender=info.address, armor=armor)
        validate_faucet_key(msg)
        return msg

    def initialize(self, fetch: Callable[[], FaucetKey]) -> KeyInfo:
        """Import the published faucet key into the local key store.

        Parameters
        ----------
        fetch : Callable[[], FaucetKey]
            Returns the currently published key, e.g. a node query.

        Returns
        -------
        KeyInfo
            The imported key.

        Raises
        ------
        KeyAlreadyExists
            If a key named for the faucet already exists locally.
        KeyNotPublished
            If no key has been published.
        """
        if self._keystore.get(self._key_name) is not None:
            raise KeyAlreadyExists(f"key {self._key_name!r} already exists locally")

        faucet_key = fetch()
        if not faucet_key.published:
            raise KeyNotPublished()

        self._keystore.import_key(self._key_name, faucet_key.armor)
        info = self._keystore.get(self._key_name)
        logger.info(
            "Faucet key imported",
            extra={"key_name": self._key_name, "address": info.address if info else None},
        )
        return info
