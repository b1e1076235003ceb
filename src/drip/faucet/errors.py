"""Typed faucet errors.

Every error carries a stable string code and an ABCI-style numeric code in
the ``faucet`` codespace.
"""

from enum import Enum

CODESPACE = "faucet"


class ErrorCode(str, Enum):
    """Stable reason codes reported to callers."""

    INVALID_ADDRESS = "invalid_address"
    SELF_MINT_FORBIDDEN = "self_mint_forbidden"
    NO_SYMBOL_MATCH = "no_symbol_match"
    EMPTY_KEY_MATERIAL = "empty_key_material"
    STAKE_DENOM_FORBIDDEN = "stake_denom_forbidden"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED_RECIPIENT = "unauthorized_recipient"
    SUPPLY_FAILURE = "supply_failure"
    KEY_ALREADY_EXISTS = "key_already_exists"
    KEY_NOT_PUBLISHED = "key_not_published"
    UNKNOWN_REQUEST = "unknown_request"


class FaucetError(Exception):
    """Base class for faucet errors."""

    code: ErrorCode
    code_number: int
    default_message: str = "faucet error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def codespace(self) -> str:
        return CODESPACE

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "codespace": self.codespace,
            "code": self.code_number,
            "reason": self.code.value,
            "message": self.message,
        }


class InvalidAddress(FaucetError):
    code = ErrorCode.INVALID_ADDRESS
    code_number = 1
    default_message = "invalid address"


class SelfMintForbidden(FaucetError):
    code = ErrorCode.SELF_MINT_FORBIDDEN
    code_number = 2
    default_message = "can't mint to yourself"


class NoSymbolMatch(FaucetError):
    code = ErrorCode.NO_SYMBOL_MATCH
    code_number = 3
    default_message = "denom must contain exactly one emoji"


class EmptyKeyMaterial(FaucetError):
    code = ErrorCode.EMPTY_KEY_MATERIAL
    code_number = 4
    default_message = "faucet key armor is empty"


class StakeDenomForbidden(FaucetError):
    code = ErrorCode.STAKE_DENOM_FORBIDDEN
    code_number = 5
    default_message = "staking denom can't be minted by the faucet"


class RateLimited(FaucetError):
    code = ErrorCode.RATE_LIMITED
    code_number = 6
    default_message = "withdraw too often, wait for the cooldown to pass"


class UnauthorizedRecipient(FaucetError):
    code = ErrorCode.UNAUTHORIZED_RECIPIENT
    code_number = 7
    default_message = "recipient does not exist and is not allowed to receive tokens"


class SupplyFailure(FaucetError):
    code = ErrorCode.SUPPLY_FAILURE
    code_number = 8
    default_message = "supply operation failed"


class KeyAlreadyExists(FaucetError):
    code = ErrorCode.KEY_ALREADY_EXISTS
    code_number = 9
    default_message = "faucet key already exists in the local key store"


class KeyNotPublished(FaucetError):
    code = ErrorCode.KEY_NOT_PUBLISHED
    code_number = 10
    default_message = "faucet key has not been published"


class UnknownRequest(FaucetError):
    code = ErrorCode.UNKNOWN_REQUEST
    code_number = 11
    default_message = "unknown faucet request"
