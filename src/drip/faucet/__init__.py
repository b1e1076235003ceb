"""Faucet module for DRIP."""

from .errors import ErrorCode, FaucetError
from .handler import FaucetHandler, HandlerResult
from .keeper import MintEngine, MintResult
from .querier import FaucetQuerier
from .store import FaucetKeyRegistry, MiningRecordStore
from .types import MODULE_NAME, Coin, FaucetKey, MiningRecord, MsgFaucetKey, MsgMint

__all__ = [
    "MODULE_NAME",
    "Coin",
    "ErrorCode",
    "FaucetError",
    "FaucetHandler",
    "FaucetKey",
    "FaucetKeyRegistry",
    "FaucetQuerier",
    "HandlerResult",
    "MiningRecord",
    "MiningRecordStore",
    "MintEngine",
    "MintResult",
    "MsgFaucetKey",
    "MsgMint",
]
