"""Structured logging for DRIP.

Features:
- JSON or console output for structlog and stdlib loggers alike
- ``extra=`` fields of stdlib records rendered as event keys
- Transaction context (tx hash, block height) propagation
- Module tag for faucet loggers
- Redaction of key material and secrets
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

tx_hash_var: ContextVar[str | None] = ContextVar("tx_hash", default=None)
block_height_var: ContextVar[int | None] = ContextVar("block_height", default=None)

FAUCET_LOGGER_PREFIX = "drip.faucet"
FAUCET_MODULE_TAG = "x/faucet"

REDACTED_FIELDS = frozenset(
    {
        "armor",
        "keystore",
        "private_key",
        "password",
        "keyring_password",
        "secret",
        "api_key",
    }
)


def _add_tx_context(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add the current transaction hash and block height, if set."""
    tx_hash = tx_hash_var.get()
    if tx_hash:
        event_dict["tx_hash"] = tx_hash
    height = block_height_var.get()
    if height is not None:
        event_dict["block_height"] = height
    return event_dict


def _add_module(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag events emitted by faucet loggers with the module name."""
    name = event_dict.get("logger") or ""
    if name == FAUCET_LOGGER_PREFIX or name.startswith(FAUCET_LOGGER_PREFIX + "."):
        event_dict.setdefault("module", FAUCET_MODULE_TAG)
    return event_dict


def _redact_sensitive(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Redact sensitive fields from log events."""
    for key in event_dict:
        if key.lower() in REDACTED_FIELDS:
            event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(
    level: str = "INFO",
    log_format: str = "json",
) -> None:
    """Configure structured logging for the application.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR).
    log_format : str
        Output format (json or text).
    """
    try:
        log_level = getattr(logging, level.upper())
    except AttributeError:
        raise ValueError(
            f"Invalid log level: {level!r}. "
            "Valid levels are: DEBUG, INFO, WARNING, ERROR, CRITICAL."
        ) from None

    shared: list[structlog.typing.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_tx_context,
        _add_module,
    ]

    if log_format.lower() == "json":
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    # Stdlib records go through the same chain, with their extra= fields.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder(), _redact_sensitive],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            _redact_sensitive,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Parameters
    ----------
    name : str | None
        Logger name. If None, uses the calling module's name.

    Returns
    -------
    structlog.stdlib.BoundLogger
        Configured logger instance.
    """
    return structlog.get_logger(name)


def set_tx_context(tx_hash: str | None, block_height: int | None = None) -> None:
    """Set the transaction context for the current execution context.

    Parameters
    ----------
    tx_hash : str | None
        Hash of the transaction being executed.
    block_height : int | None
        Height of the block being executed.
    """
    tx_hash_var.set(tx_hash)
    block_height_var.set(block_height)


def clear_tx_context() -> None:
    """Clear the transaction context."""
    tx_hash_var.set(None)
    block_height_var.set(None)
