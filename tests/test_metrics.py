"""Tests for Prometheus metrics."""

from prometheus_client import REGISTRY

from drip.faucet.handler import FaucetHandler
from drip.faucet.types import MsgFaucetKey, MsgMint
from drip.observability.metrics import (
    KEY_PUBLISHES,
    MINT_REQUESTS,
    REQUEST_DURATION,
    TOKENS_MINTED,
)


def _sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0


class TestMetrics:
    """Tests for Prometheus metrics."""

    def test_mint_requests_counter_labels(self):
        """MINT_REQUESTS counter is labelled by outcome."""
        before = _sample("drip_mint_requests_total", {"status": "rate_limited"})

        MINT_REQUESTS.labels(status="rate_limited").inc()

        assert _sample("drip_mint_requests_total", {"status": "rate_limited"}) == before + 1

    def test_tokens_minted_counter(self):
        """TOKENS_MINTED counts units per denomination."""
        before = _sample("drip_tokens_minted_total", {"denom": "🍕"})

        TOKENS_MINTED.labels(denom="🍕").inc(100)

        assert _sample("drip_tokens_minted_total", {"denom": "🍕"}) == before + 100

    def test_key_publishes_counter(self):
        """KEY_PUBLISHES counter is labelled by outcome."""
        before = _sample("drip_key_publishes_total", {"status": "success"})

        KEY_PUBLISHES.labels(status="success").inc()

        assert _sample("drip_key_publishes_total", {"status": "success"}) == before + 1

    def test_request_duration_histogram(self):
        before = _sample("drip_request_duration_seconds_count", {"msg_type": "mint"})

        REQUEST_DURATION.labels(msg_type="mint").observe(0.002)

        after = _sample("drip_request_duration_seconds_count", {"msg_type": "mint"})
        assert after == before + 1


class TestHandlerMetrics:
    """Tests for metrics recorded by the message handler."""

    def test_rejection_counted_by_code(self, engine, registry):
        before = _sample("drip_mint_requests_total", {"status": "no_symbol_match"})

        FaucetHandler(engine, registry).handle(
            MsgMint(sender="sA", minter="rA", denom="coin"), block_time=1
        )

        after = _sample("drip_mint_requests_total", {"status": "no_symbol_match"})
        assert after == before + 1

    def test_tokens_minted_on_success(self, engine, registry):
        before = _sample("drip_tokens_minted_total", {"denom": "🥕"})

        FaucetHandler(engine, registry).handle(
            MsgMint(sender="sA", minter="rA", denom="🥕"), block_time=1
        )

        assert _sample("drip_tokens_minted_total", {"denom": "🥕"}) == before + 100

    def test_key_publish_counted(self, engine, registry):
        labels = {"status": "success"}
        before = _sample("drip_key_publishes_total", labels)

        FaucetHandler(engine, registry).handle(
            MsgFaucetKey(sender="opA", armor="ARMOR"), block_time=1
        )

        assert _sample("drip_key_publishes_total", labels) == before + 1

    def test_key_publish_rejection_counted(self, engine, registry):
        labels = {"status": "empty_key_material"}
        before = _sample("drip_key_publishes_total", labels)

        FaucetHandler(engine, registry).handle(MsgFaucetKey(sender="opA", armor=""), block_time=1)

        assert _sample("drip_key_publishes_total", labels) == before + 1

    def test_key_publish_duration_observed(self, engine, registry):
        labels = {"msg_type": "faucet-key"}
        before = _sample("drip_request_duration_seconds_count", labels)

        FaucetHandler(engine, registry).handle(MsgFaucetKey(sender="", armor="A"), block_time=1)
        FaucetHandler(engine, registry).handle(MsgFaucetKey(sender="opA", armor="A"), block_time=1)

        assert _sample("drip_request_duration_seconds_count", labels) == before + 2
