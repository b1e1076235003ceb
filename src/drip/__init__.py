"""DRIP - Denomination Rate-limited Issuance Protocol."""

__version__ = "0.1.0"
