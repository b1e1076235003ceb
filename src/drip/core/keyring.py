"""Local key store holding password-encrypted faucet keys.

Keys are stored as Ethereum keystore JSON (one file per key name). The
keystore JSON is the armor exchanged between operators: it is encrypted,
so publishing it shares the key only with operators who know the password.
"""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from eth_account import Account
from eth_account.signers.local import LocalAccount
from pydantic import SecretStr

from drip.faucet.errors import KeyAlreadyExists

KEY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class KeyInfo:
    """Public information about a stored key."""

    name: str
    address: str


class KeyStore(ABC):
    """Abstract local key store."""

    @abstractmethod
    def get(self, name: str) -> KeyInfo | None:
        """Return the key stored under ``name``, or None."""
        ...

    @abstractmethod
    def export(self, name: str) -> str:
        """Export the key stored under ``name`` as armor."""
        ...

    @abstractmethod
    def import_key(self, name: str, armor: str) -> None:
        """Store ``armor`` under ``name``."""
        ...


def _parse_armor(armor: str) -> dict:
    try:
        keystore = json.loads(armor)
    except json.JSONDecodeError as e:
        raise ValueError(f"Armor is not valid keystore JSON: {e}") from None
    if not isinstance(keystore, dict) or "address" not in keystore:
        raise ValueError("Armor is missing the keystore address")
    if "crypto" not in keystore and "Crypto" not in keystore:
        raise ValueError("Armor is missing the keystore crypto section")
    return keystore


class FileKeyring(KeyStore):
    """Key store keeping one keystore JSON file per key.

    Parameters
    ----------
    directory : str | Path
        Directory holding the key files. Created on first write.
    kdf : str
        Key derivation function for new keys ("scrypt" or "pbkdf2").
    iterations : int | None
        KDF work factor; the eth_account default when None.
    """

    def __init__(
        self,
        directory: str | Path,
        kdf: str = "scrypt",
        iterations: int | None = None,
    ):
        self._directory = Path(directory).expanduser()
        self._kdf = kdf
        self._iterations = iterations

    def _path(self, name: str) -> Path:
        if not KEY_NAME_PATTERN.match(name):
            raise ValueError(f"Invalid key name: {name!r}")
        return self._directory / f"{name}.json"

    def get(self, name: str) -> KeyInfo | None:
        path = self._path(name)
        if not path.exists():
            return None
        keystore = _parse_armor(path.read_text())
        address = keystore["address"].lower()
        if not address.startswith("0x"):
            address = f"0x{address}"
        return KeyInfo(name=name, address=address)

    def export(self, name: str) -> str:
        path = self._path(name)
        if not path.exists():
            raise FileNotFoundError(f"Key not found: {name}")
        return path.read_text().strip()

    def import_key(self, name: str, armor: str) -> None:
        """Store ``armor`` under ``name``.

        Raises
        ------
        KeyAlreadyExists
            If a key is already stored under ``name``.
        ValueError
            If ``armor`` is not keystore JSON.
        """
        path = self._path(name)
        if path.exists():
            raise KeyAlreadyExists(f"key {name!r} already exists")
        _parse_armor(armor)
        self._write(path, armor)

    def create(self, name: str, password: SecretStr) -> KeyInfo:
        """Generate a new key and store it encrypted under ``name``."""
        path = self._path(name)
        if path.exists():
            raise KeyAlreadyExists(f"key {name!r} already exists")
        account = Account.create()
        keystore = Account.encrypt(
            account.key,
            password.get_secret_value(),
            kdf=self._kdf,
            iterations=self._iterations,
        )
        self._write(path, json.dumps(keystore))
        return KeyInfo(name=name, address=account.address.lower())

    def unlock(self, name: str, password: SecretStr) -> LocalAccount:
        """Decrypt the key stored under ``name`` for signing."""
        armor = self.export(name)
        return Account.from_key(Account.decrypt(armor, password.get_secret_value()))

    def _write(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory keeps the rename atomic.
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".drip-key-")
        fd_closed = False
        try:
            os.fchmod(fd, 0o600)
            os.write(fd, content.encode("utf-8"))
            os.close(fd)
            fd_closed = True
            os.rename(temp_path, path)
        except Exception:
            if not fd_closed:
                os.close(fd)
            Path(temp_path).unlink(missing_ok=True)
            raise
