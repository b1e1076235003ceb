"""Tests for structured logging."""

import json
import logging

import pytest
import structlog

from drip.faucet.handler import FaucetHandler
from drip.faucet.types import MsgMint
from drip.observability.logging import (
    _add_module,
    _add_tx_context,
    _redact_sensitive,
    block_height_var,
    clear_tx_context,
    configure_logging,
    get_logger,
    set_tx_context,
    tx_hash_var,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root logging after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    clear_tx_context()
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestTxContext:
    """Tests for the transaction context variables."""

    def test_default_none(self):
        assert tx_hash_var.get() is None
        assert block_height_var.get() is None

    def test_set_and_clear(self):
        set_tx_context("ABCD", 42)
        assert tx_hash_var.get() == "ABCD"
        assert block_height_var.get() == 42

        clear_tx_context()
        assert tx_hash_var.get() is None
        assert block_height_var.get() is None

    def test_processor_adds_context(self):
        set_tx_context("ABCD", 0)

        result = _add_tx_context(None, None, {"event": "test"})

        assert result["tx_hash"] == "ABCD"
        assert result["block_height"] == 0

    def test_processor_without_context(self):
        result = _add_tx_context(None, None, {"event": "test"})

        assert "tx_hash" not in result
        assert "block_height" not in result

    def test_handler_scopes_context(self, engine, registry, supply):
        """The handler sets the context while handling and clears it after."""
        seen = {}
        supply.mint_coins.side_effect = lambda *args: seen.update(
            tx_hash=tx_hash_var.get(), height=block_height_var.get()
        )

        FaucetHandler(engine, registry).handle(
            MsgMint(sender="sA", minter="rA", denom="🪙"),
            block_time=1,
            tx_hash="ABCD",
            block_height=7,
        )

        assert seen == {"tx_hash": "ABCD", "height": 7}
        assert tx_hash_var.get() is None


class TestAddModuleProcessor:
    """Tests for _add_module processor."""

    @pytest.mark.parametrize("name", ["drip.faucet", "drip.faucet.keeper"])
    def test_tags_faucet_loggers(self, name):
        result = _add_module(None, None, {"event": "test", "logger": name})
        assert result["module"] == "x/faucet"

    @pytest.mark.parametrize("name", ["drip.store.kvstore", "drip.faucetry", None])
    def test_leaves_other_loggers(self, name):
        result = _add_module(None, None, {"event": "test", "logger": name})
        assert "module" not in result


class TestRedactSensitiveProcessor:
    """Tests for _redact_sensitive processor."""

    @pytest.mark.parametrize(
        "field", ["armor", "keystore", "private_key", "password", "secret", "api_key"]
    )
    def test_redacts_field(self, field):
        result = _redact_sensitive(None, None, {"event": "test", field: "value"})
        assert result[field] == "[REDACTED]"

    def test_redacts_case_insensitive(self):
        """Redacts fields case-insensitively."""
        result = _redact_sensitive(None, None, {"event": "test", "Armor": "{...}"})
        assert result["Armor"] == "[REDACTED]"

    def test_preserves_non_sensitive(self):
        """Addresses and amounts stay readable."""
        event_dict = {"event": "test", "sender": "sA", "denom": "🪙", "amount": "1"}
        result = _redact_sensitive(None, None, event_dict)
        assert result == {"event": "test", "sender": "sA", "denom": "🪙", "amount": "1"}


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_json_format(self):
        configure_logging(level="INFO", log_format="json")

        assert get_logger("test") is not None

    def test_configure_console_format(self):
        configure_logging(level="DEBUG", log_format="console")

        assert get_logger("test") is not None

    def test_configure_log_level(self):
        configure_logging(level="WARNING", log_format="json")

        assert logging.getLogger().level == logging.WARNING

    def test_single_handler(self):
        """Reconfiguring replaces the root handler."""
        configure_logging(level="INFO", log_format="json")
        configure_logging(level="INFO", log_format="json")

        assert len(logging.getLogger().handlers) == 1

    def test_configure_invalid_log_level_raises(self):
        """Invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="INVALID", log_format="json")


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_stdlib_extra_fields_rendered(capfd):
    """Stdlib records keep their extra= fields, tagged and redacted."""
    configure_logging(level="INFO", log_format="json")
    set_tx_context("ABCD", 3)

    logging.getLogger("drip.faucet.store").info(
        "Faucet key published", extra={"sender": "opA", "armor": "{secret}"}
    )

    (event,) = _json_lines(capfd.readouterr().out)
    assert event["event"] == "Faucet key published"
    assert event["sender"] == "opA"
    assert event["armor"] == "[REDACTED]"
    assert event["module"] == "x/faucet"
    assert event["tx_hash"] == "ABCD"
    assert event["block_height"] == 3
    assert event["level"] == "info"


def test_structlog_integration(capfd):
    """Structlog loggers render through the same handler."""
    configure_logging(level="INFO", log_format="json")

    get_logger("integration").info("test event", sender="sA", password="hunter2")

    (event,) = _json_lines(capfd.readouterr().out)
    assert event["event"] == "test event"
    assert event["sender"] == "sA"
    assert event["password"] == "[REDACTED]"
