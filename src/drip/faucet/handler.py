"""Routes faucet messages from the ledger to the mint engine and key registry."""

import logging
import time
from dataclasses import dataclass, field

from drip.observability.logging import clear_tx_context, set_tx_context
from drip.observability.metrics import (
    KEY_PUBLISHES,
    MINT_REQUESTS,
    REQUEST_DURATION,
    TOKENS_MINTED,
)

from .errors import ErrorCode, FaucetError, UnknownRequest
from .keeper import MintEngine
from .store import FaucetKeyRegistry
from .types import MODULE_NAME, MsgFaucetKey, MsgMint
from .validation import (
    DEFAULT_DENOM_PREDICATE,
    DenomPredicate,
    validate_faucet_key,
    validate_mint,
)

logger = logging.getLogger(__name__)


@dataclass
class HandlerResult:
    """Result of handling one message."""

    success: bool
    code: ErrorCode | None
    message: str
    events: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "success": self.success,
            "code": self.code.value if self.code else None,
            "message": self.message,
            "events": self.events,
        }


class FaucetHandler:
    """Message router for the faucet module.

    A FaucetError is returned as a failed result rather than raised, so the
    enclosing transaction still commits a mining record advanced before the
    failure.

    Parameters
    ----------
    engine : MintEngine
        Engine handling mint requests.
    registry : FaucetKeyRegistry
        Registry receiving published keys.
    predicate : DenomPredicate
        Denomination eligibility check.
    """

    def __init__(
        self,
        engine: MintEngine,
        registry: FaucetKeyRegistry,
        predicate: DenomPredicate = DEFAULT_DENOM_PREDICATE,
    ):
        self._engine = engine
        self._registry = registry
        self._predicate = predicate

    def handle(
        self,
        msg: object,
        block_time: int,
        tx_hash: str | None = None,
        block_height: int | None = None,
    ) -> HandlerResult:
        """Handle a message at the ledger's block time.

        Parameters
        ----------
        msg : object
            MsgMint or MsgFaucetKey.
        block_time : int
            Unix time from the ledger clock.
        tx_hash : str | None
            Hash of the enclosing transaction, attached to log events.
        block_height : int | None
            Height of the enclosing block, attached to log events.

        Returns
        -------
        HandlerResult
            Success, or the code of the first failing step.
        """
        set_tx_context(tx_hash, block_height)
        try:
            return self._route(msg, block_time)
        finally:
            clear_tx_context()

    def _route(self, msg: object, block_time: int) -> HandlerResult:
        if isinstance(msg, MsgMint):
            return self._handle_mint(msg, block_time)
        if isinstance(msg, MsgFaucetKey):
            return self._handle_faucet_key(msg)
        error = UnknownRequest(f"unrecognized {MODULE_NAME} message type: {type(msg).__name__}")
        return HandlerResult(success=False, code=error.code, message=error.message)

    def _handle_mint(self, msg: MsgMint, block_time: int) -> HandlerResult:
        start = time.perf_counter()
        try:
            validate_mint(msg, self._predicate)
            result = self._engine.mint_and_send(msg.sender, msg.minter, block_time, msg.denom)
        except FaucetError as e:
            MINT_REQUESTS.labels(status=e.code.value).inc()
            logger.info(
                "Mint rejected",
                extra={"sender": msg.sender, "minter": msg.minter, "reason": e.code.value},
            )
            return HandlerResult(success=False, code=e.code, message=e.message)
        finally:
            REQUEST_DURATION.labels(msg_type="mint").observe(time.perf_counter() - start)

        MINT_REQUESTS.labels(status="success").inc()
        TOKENS_MINTED.labels(denom=result.coin.denom).inc(result.coin.amount)
        return HandlerResult(
            success=True,
            code=None,
            message=f"Minted {result.coin} for {result.recipient}",
            events=[
                {
                    "type": "mint",
                    "module": MODULE_NAME,
                    "sender": result.sender,
                    "minter": result.recipient,
                    "amount": str(result.coin),
                    "tally": str(result.tally),
                    "last_time": str(result.last_time),
                }
            ],
        )

    def _handle_faucet_key(self, msg: MsgFaucetKey) -> HandlerResult:
        start = time.perf_counter()
        try:
            validate_faucet_key(msg)
            self._registry.publish(msg.sender, msg.armor)
        except FaucetError as e:
            KEY_PUBLISHES.labels(status=e.code.value).inc()
            logger.info(
                "Faucet key rejected",
                extra={"sender": msg.sender, "reason": e.code.value},
            )
            return HandlerResult(success=False, code=e.code, message=e.message)
        finally:
            REQUEST_DURATION.labels(msg_type="faucet-key").observe(time.perf_counter() - start)

        KEY_PUBLISHES.labels(status="success").inc()
        return HandlerResult(
            success=True,
            code=None,
            message="Faucet key published",
            events=[{"type": "faucet-key", "module": MODULE_NAME, "sender": msg.sender}],
        )
