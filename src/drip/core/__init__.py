"""Core DRIP components."""

from .keyring import FileKeyring, KeyInfo, KeyStore

__all__ = [
    "FileKeyring",
    "KeyInfo",
    "KeyStore",
]
