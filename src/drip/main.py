#!/usr/bin/env python3
"""DRIP - Denomination Rate-limited Issuance Protocol.

Entry point for the DRIP CLI and query server.
"""

import asyncio
import logging
import signal
import sys

from drip.cli import create_parser, run_cli
from drip.config import DripConfig
from drip.faucet.querier import FaucetQuerier
from drip.faucet.store import FaucetKeyRegistry
from drip.observability.health import HealthServer, StoreHealthCheck
from drip.observability.logging import configure_logging
from drip.store import KVStore, MemoryKVStore, RedisKVStore


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    return create_parser().parse_args(argv)


def build_store(config: DripConfig) -> KVStore:
    """Open the faucet state store named by the configuration."""
    if config.redis_url:
        return RedisKVStore.from_url(config.redis_url, prefix=config.store_prefix)
    return MemoryKVStore()


async def run_service() -> None:
    """Run the DRIP query server (long-running mode).

    Serves the faucet key query, health probes and Prometheus metrics
    against the configured state store until SIGTERM or SIGINT.
    """
    config = DripConfig()
    configure_logging(level=config.log_level, log_format=config.log_format)

    logger = logging.getLogger(__name__)
    logger.info("DRIP starting")
    logger.info("Mint amount: %s, cooldown: %ss", config.mint_amount, config.cooldown_seconds)

    try:
        store = build_store(config)
    except Exception as e:
        logger.error("Failed to open state store: %s", e)
        sys.exit(1)
    if isinstance(store, MemoryKVStore):
        logger.warning("REDIS_URL not set; serving an empty in-memory store")

    querier = FaucetQuerier(FaucetKeyRegistry(store))

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def on_shutdown_signal(sig_name: str) -> None:
        logger.info("Received signal %s, initiating shutdown", sig_name)
        shutdown_event.set()

    loop.add_signal_handler(signal.SIGTERM, lambda: on_shutdown_signal("SIGTERM"))
    loop.add_signal_handler(signal.SIGINT, lambda: on_shutdown_signal("SIGINT"))

    server = HealthServer(port=config.metrics_port, querier=querier)
    server.add_check(StoreHealthCheck(store))
    await server.start()
    logger.info("DRIP server ready on port %d", config.metrics_port)

    await shutdown_event.wait()

    logger.info("DRIP shutting down...")
    await server.stop()
    logger.info("DRIP shutdown complete")


def run(argv: list[str] | None = None) -> None:
    """Main entry point for DRIP."""
    args = parse_args(argv)

    if args.command and args.command != "run":
        exit_code = run_cli(args)
        if exit_code >= 0:
            sys.exit(exit_code)
        create_parser().print_help()
        sys.exit(0)

    asyncio.run(run_service())


if __name__ == "__main__":
    run()
