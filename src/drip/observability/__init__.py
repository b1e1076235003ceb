"""Observability module for DRIP."""

from .health import HealthCheck, HealthServer, HealthStatus, StoreHealthCheck
from .logging import clear_tx_context, configure_logging, get_logger, set_tx_context
from .metrics import KEY_PUBLISHES, MINT_REQUESTS, REQUEST_DURATION, TOKENS_MINTED

__all__ = [
    # Health
    "HealthCheck",
    "HealthServer",
    "HealthStatus",
    "StoreHealthCheck",
    # Logging
    "clear_tx_context",
    "configure_logging",
    "get_logger",
    "set_tx_context",
    # Metrics
    "KEY_PUBLISHES",
    "MINT_REQUESTS",
    "REQUEST_DURATION",
    "TOKENS_MINTED",
]
