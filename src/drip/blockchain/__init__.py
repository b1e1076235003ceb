"""Ledger node integration for DRIP."""

from .client import NodeClient

__all__ = ["NodeClient"]
