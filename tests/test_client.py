"""Tests for the node query client."""

import aiohttp
import pytest
from aiohttp.test_utils import TestServer

from drip.blockchain import NodeClient
from drip.faucet.querier import FaucetQuerier
from drip.faucet.types import FaucetKey
from drip.observability.health import HealthServer


@pytest.fixture
async def node(registry):
    """Query server over the test registry."""
    server = TestServer(HealthServer(querier=FaucetQuerier(registry)).build_app())
    await server.start_server()
    yield server
    await server.close()


class TestNodeClient:
    """Tests for NodeClient."""

    def test_strips_trailing_slash(self):
        assert NodeClient("http://node:8080/").node_url == "http://node:8080"

    @pytest.mark.asyncio
    async def test_fetch_unpublished_key(self, node):
        client = NodeClient(str(node.make_url("/")))

        assert await client.fetch_faucet_key() == FaucetKey()

    @pytest.mark.asyncio
    async def test_fetch_published_key(self, node, registry):
        registry.publish("opA", "ARMOR1")
        client = NodeClient(str(node.make_url("/")))

        faucet_key = await client.fetch_faucet_key()

        assert faucet_key.armor == "ARMOR1"
        assert faucet_key.published is True

    @pytest.mark.asyncio
    async def test_query_raw(self, node):
        client = NodeClient(str(node.make_url("/")))

        assert await client.query("/health") == b'{"status": "ok"}'

    @pytest.mark.asyncio
    async def test_error_status_raises(self, node):
        client = NodeClient(str(node.make_url("/")))

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await client.query("custom/faucet/records")

        assert exc_info.value.status == 404
