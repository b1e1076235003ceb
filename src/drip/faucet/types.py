"""Faucet state and message types."""

import json

from pydantic import BaseModel, ConfigDict, Field

MODULE_NAME = "faucet"
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

# Reserved store key holding the published faucet key.
FAUCET_STORE_KEY = b"DefaultFaucetStoreKey"


class Coin(BaseModel):
    """An amount of a single denomination."""

    model_config = ConfigDict(frozen=True)

    denom: str
    amount: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class MiningRecord(BaseModel):
    """Per-address mint history.

    ``tally`` is the cumulative amount ever minted for the address and
    ``last_time`` the Unix time of the most recent successful mint.
    """

    minter: str
    tally: int = Field(default=0, ge=0)
    last_time: int = 0

    @classmethod
    def empty(cls, minter: str) -> "MiningRecord":
        """Zero record returned for addresses that never minted."""
        return cls(minter=minter)


class FaucetKey(BaseModel):
    """Exported faucet key shared between operators.

    An empty ``armor`` means no key has been published.
    """

    armor: str = ""

    @property
    def published(self) -> bool:
        return bool(self.armor)


class _Msg(BaseModel):
    """Base for state transition messages routed to the faucet."""

    model_config = ConfigDict(frozen=True)

    sender: str

    def route(self) -> str:
        return ROUTER_KEY

    def type(self) -> str:
        raise NotImplementedError

    def get_signers(self) -> list[str]:
        return [self.sender]

    def get_sign_bytes(self) -> bytes:
        """Canonical JSON encoding used for signing."""
        body = {"type": f"{MODULE_NAME}/{self.type()}", "value": self.model_dump()}
        return json.dumps(
            body, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")


class MsgMint(_Msg):
    """Request to mint ``denom`` for ``minter``, signed by ``sender``."""

    minter: str
    denom: str

    def type(self) -> str:
        return "mint"


class MsgFaucetKey(_Msg):
    """Request to publish the faucet key armor."""

    armor: str

    def type(self) -> str:
        return "faucet-key"
