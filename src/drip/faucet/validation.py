"""Stateless request validation.

Validators never touch the store; the handler runs them before any
state is read or written.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

import emoji

from .errors import EmptyKeyMaterial, InvalidAddress, NoSymbolMatch, SelfMintForbidden
from .types import FAUCET_STORE_KEY, MsgFaucetKey, MsgMint


class DenomPredicate(ABC):
    """Decides which denominations the faucet may mint.

    A denomination is eligible when it contains exactly one match.
    """

    @abstractmethod
    def count_matches(self, denom: str) -> int:
        """Count symbol matches in ``denom``."""
        ...

    def is_eligible(self, denom: str) -> bool:
        return self.count_matches(denom) == 1


class EmojiDenomPredicate(DenomPredicate):
    """Counts emoji in the denomination."""

    def count_matches(self, denom: str) -> int:
        return len(emoji.emoji_list(denom))


class SymbolSetPredicate(DenomPredicate):
    """Counts occurrences of a fixed set of symbols.

    Longer symbols win over their prefixes and matches do not overlap.

    Parameters
    ----------
    symbols : Iterable[str]
        Symbols that count as matches.
    """

    def __init__(self, symbols: Iterable[str]):
        self._symbols = sorted({s for s in symbols if s}, key=len, reverse=True)
        if not self._symbols:
            raise ValueError("At least one symbol is required")

    def count_matches(self, denom: str) -> int:
        count = 0
        pos = 0
        while pos < len(denom):
            for symbol in self._symbols:
                if denom.startswith(symbol, pos):
                    count += 1
                    pos += len(symbol)
                    break
            else:
                pos += 1
        return count


DEFAULT_DENOM_PREDICATE = EmojiDenomPredicate()


def _check_address(address: str, role: str) -> None:
    if not address:
        raise InvalidAddress(f"{role} address is empty")
    if address.encode("utf-8") == FAUCET_STORE_KEY:
        raise InvalidAddress(f"{role} address {address} is a reserved store key")


def validate_mint(msg: MsgMint, predicate: DenomPredicate = DEFAULT_DENOM_PREDICATE) -> None:
    """Validate a mint request.

    Raises
    ------
    InvalidAddress
        If minter or sender is empty or names the reserved store key.
    SelfMintForbidden
        If sender and minter are the same address.
    NoSymbolMatch
        If the denom does not contain exactly one eligible symbol.
    """
    _check_address(msg.minter, "minter")
    _check_address(msg.sender, "sender")
    if msg.sender == msg.minter:
        raise SelfMintForbidden()
    matches = predicate.count_matches(msg.denom)
    if matches != 1:
        raise NoSymbolMatch(f"denom {msg.denom!r} has {matches} symbol matches, need exactly 1")


def validate_faucet_key(msg: MsgFaucetKey) -> None:
    """Validate a faucet key publish request.

    Raises
    ------
    InvalidAddress
        If sender is empty or names the reserved store key.
    EmptyKeyMaterial
        If the armor is empty.
    """
    _check_address(msg.sender, "sender")
    if not msg.armor:
        raise EmptyKeyMaterial()
