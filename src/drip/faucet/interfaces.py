"""Collaborator interfaces consumed by the faucet.

The ledger injects concrete implementations at construction; tests use
fakes.
"""

from abc import ABC, abstractmethod
from typing import Any

from .types import Coin


class SupplyKeeper(ABC):
    """Mints coins and moves them out of module accounts."""

    @abstractmethod
    def mint_coins(self, module_name: str, coins: list[Coin]) -> None:
        """Mint ``coins`` into the balance owned by ``module_name``."""
        ...

    @abstractmethod
    def send_coins_from_module_to_account(
        self, module_name: str, recipient: str, coins: list[Coin]
    ) -> None:
        """Transfer ``coins`` from a module balance to ``recipient``."""
        ...


class AccountKeeper(ABC):
    """Looks up ledger accounts."""

    @abstractmethod
    def get_account(self, address: str) -> Any | None:
        """Return the account stored at ``address``, or None."""
        ...


class StakingKeeper(ABC):
    """Exposes staking parameters."""

    @abstractmethod
    def bond_denom(self) -> str:
        """Denomination used for bonding."""
        ...
