"""HTTP client for querying a ledger node."""

import logging

import aiohttp

from drip.faucet.querier import key_query_path, parse_key_response
from drip.faucet.types import FaucetKey

logger = logging.getLogger(__name__)


class NodeClient:
    """Queries a node's custom query routes over HTTP.

    Parameters
    ----------
    node_url : str
        Base URL of the node, e.g. ``http://localhost:8080``.
    timeout_seconds : float
        Total timeout for each request.
    """

    def __init__(self, node_url: str, timeout_seconds: float = 10.0):
        self._node_url = node_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def node_url(self) -> str:
        return self._node_url

    async def query(self, path: str) -> bytes:
        """Fetch the raw response of a query path.

        Parameters
        ----------
        path : str
            Query path, e.g. ``custom/faucet/key``.

        Returns
        -------
        bytes
            Response body.

        Raises
        ------
        aiohttp.ClientResponseError
            If the node answers with an error status.
        """
        url = f"{self._node_url}/{path.lstrip('/')}"
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                body = await response.read()
        logger.debug("Node query answered", extra={"url": url, "bytes": len(body)})
        return body

    async def fetch_faucet_key(self) -> FaucetKey:
        """Fetch the published faucet key."""
        return parse_key_response(await self.query(key_query_path()))
