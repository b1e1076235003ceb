"""Mint Engine for the DRIP faucet.

Mints a fixed amount of a denomination and sends it to a recipient,
enforcing a per-sender cooldown.

The sender's mining record is advanced before any coins are minted and is
not reverted when a later step fails. Coins minted before an
UnauthorizedRecipient failure stay in the module balance.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .errors import (
    FaucetError,
    RateLimited,
    StakeDenomForbidden,
    SupplyFailure,
    UnauthorizedRecipient,
)
from .interfaces import AccountKeeper, StakingKeeper, SupplyKeeper
from .store import MiningRecordStore
from .types import MODULE_NAME, Coin

logger = logging.getLogger(__name__)


def _format_time(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return f"unix time {timestamp}"


@dataclass
class MintResult:
    """Outcome of a successful mint."""

    sender: str
    recipient: str
    coin: Coin
    tally: int
    last_time: int


class MintEngine:
    """Rate-limited mint-and-send state transition.

    Parameters
    ----------
    supply : SupplyKeeper
        Mints coins and moves them out of the module balance.
    staking : StakingKeeper
        Provides the bond denomination, which is never minted.
    account : AccountKeeper
        Resolves recipients.
    records : MiningRecordStore
        Per-sender mining records.
    amount : int
        Amount minted by every successful request.
    cooldown : timedelta
        Minimum time between two successful mints by the same sender.
    """

    def __init__(
        self,
        supply: SupplyKeeper,
        staking: StakingKeeper,
        account: AccountKeeper,
        records: MiningRecordStore,
        amount: int,
        cooldown: timedelta,
    ):
        if amount <= 0:
            raise ValueError("Mint amount must be positive")
        if cooldown < timedelta(0):
            raise ValueError("Cooldown must not be negative")
        self._supply = supply
        self._staking = staking
        self._account = account
        self._records = records
        self._amount = amount
        self._cooldown = cooldown

    @property
    def amount(self) -> int:
        """Amount minted per request."""
        return self._amount

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    def mint_and_send(
        self,
        sender: str,
        recipient: str,
        request_time: int,
        denom: str,
    ) -> MintResult:
        """Mint ``denom`` and send it to ``recipient``.

        Parameters
        ----------
        sender : str
            Address whose cooldown is charged.
        recipient : str
            Address receiving the minted coins.
        request_time : int
            Unix time from the ledger clock.
        denom : str
            Denomination to mint.

        Returns
        -------
        MintResult
            Minted coin and the sender's updated record.

        Raises
        ------
        StakeDenomForbidden
            If ``denom`` is the bond denomination.
        RateLimited
            If the sender's cooldown has not elapsed.
        SupplyFailure
            If minting or the transfer fails. The record stays advanced.
        UnauthorizedRecipient
            If the recipient account does not exist. The record stays
            advanced and the minted coins stay in the module balance.
        """
        if denom == self._staking.bond_denom():
            raise StakeDenomForbidden(f"{denom} is the staking denom")

        record = self._records.get(sender)
        next_allowed = record.last_time + int(self._cooldown.total_seconds())
        if self._records.has(sender) and next_allowed > request_time:
            raise RateLimited(f"{sender} may mint again at {_format_time(next_allowed)}")

        coin = Coin(denom=denom, amount=self._amount)
        record.tally += self._amount
        record.last_time = request_time
        self._records.set(record)

        logger.info(
            "Minting coin",
            extra={"sender": sender, "coin": str(coin), "tally": record.tally},
        )
        self._call_supply("mint_coins", MODULE_NAME, [coin])

        if self._account.get_account(recipient) is None:
            raise UnauthorizedRecipient(
                f"{recipient} does not exist and is not allowed to receive tokens"
            )

        self._call_supply("send_coins_from_module_to_account", MODULE_NAME, recipient, [coin])
        logger.info(
            "Coin sent",
            extra={"sender": sender, "recipient": recipient, "coin": str(coin)},
        )
        return MintResult(
            sender=sender,
            recipient=recipient,
            coin=coin,
            tally=record.tally,
            last_time=record.last_time,
        )

    def _call_supply(self, operation: str, *args) -> None:
        try:
            getattr(self._supply, operation)(*args)
        except FaucetError:
            raise
        except Exception as e:
            logger.error(
                "Supply operation failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise SupplyFailure(str(e)) from e
