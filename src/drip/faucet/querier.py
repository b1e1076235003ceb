"""Read-only queries served to the ledger's query transport."""

from .errors import UnknownRequest
from .store import FaucetKeyRegistry
from .types import MODULE_NAME, FaucetKey

QUERY_KEY = "key"


def key_query_path() -> str:
    """Path of the faucet key query on a node."""
    return f"custom/{MODULE_NAME}/{QUERY_KEY}"


def parse_key_response(data: bytes) -> FaucetKey:
    """Decode a ``key`` query response."""
    return FaucetKey.model_validate_json(data)


class FaucetQuerier:
    """Answers faucet queries.

    Parameters
    ----------
    registry : FaucetKeyRegistry
        Source of the published faucet key.
    """

    def __init__(self, registry: FaucetKeyRegistry):
        self._registry = registry

    def query(self, path: list[str]) -> bytes:
        """Answer the query at ``path``.

        Raises
        ------
        UnknownRequest
            If the path names no faucet query.
        """
        if path == [QUERY_KEY]:
            return self._registry.fetch().model_dump_json().encode("utf-8")
        raise UnknownRequest(f"unknown {MODULE_NAME} query endpoint: {'/'.join(path)}")
