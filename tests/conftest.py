"""Pytest configuration and fixtures for DRIP tests."""

import os
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from drip.core.keyring import FileKeyring
from drip.faucet.keeper import MintEngine
from drip.faucet.store import FaucetKeyRegistry, MiningRecordStore
from drip.store import MemoryKVStore

BOND_DENOM = "stake"
MINT_AMOUNT = 100
COOLDOWN = timedelta(hours=24)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear DRIP-related environment variables before each test."""
    env_prefixes = ("DRIP_", "REDIS_")
    for key in list(os.environ.keys()):
        if key.startswith(env_prefixes):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def kv():
    """Empty in-memory key-value store."""
    return MemoryKVStore()


@pytest.fixture
def records(kv):
    return MiningRecordStore(kv)


@pytest.fixture
def registry(kv):
    return FaucetKeyRegistry(kv)


@pytest.fixture
def supply():
    """Supply collaborator fake recording calls."""
    return MagicMock()


@pytest.fixture
def staking():
    keeper = MagicMock()
    keeper.bond_denom.return_value = BOND_DENOM
    return keeper


@pytest.fixture
def accounts():
    """Account collaborator knowing every address except 'ghost' ones."""
    keeper = MagicMock()
    keeper.get_account.side_effect = lambda address: (
        None if address.startswith("ghost") else {"address": address}
    )
    return keeper


@pytest.fixture
def engine(supply, staking, accounts, records):
    return MintEngine(
        supply=supply,
        staking=staking,
        account=accounts,
        records=records,
        amount=MINT_AMOUNT,
        cooldown=COOLDOWN,
    )


@pytest.fixture
def keyring(tmp_path):
    """File keyring with a cheap KDF so key creation stays fast."""
    return FileKeyring(tmp_path / "keyring", kdf="pbkdf2", iterations=2)


@pytest.fixture
def password():
    return SecretStr("correct horse")
