"""Tests for DRIP configuration management."""

import pytest
from pydantic import ValidationError

from drip.config import DripConfig


class TestDripConfigDefaults:
    """Test default configuration values."""

    def test_faucet_defaults(self):
        """Faucet policy defaults to one coin per day."""
        config = DripConfig()

        assert config.mint_amount == 1
        assert config.cooldown_seconds == 86400
        assert config.key_name == "faucet"

    def test_keyring_defaults(self):
        config = DripConfig()

        assert config.keyring_dir == "~/.drip/keyring"
        assert config.keyring_password is None
        assert config.node_url == "http://localhost:8080"

    def test_observability_defaults(self):
        """Observability settings have correct defaults."""
        config = DripConfig()

        assert config.metrics_port == 8080
        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.redis_url is None
        assert config.store_prefix == "drip:faucet:"


class TestDripConfigEnvVars:
    """Test environment variable loading."""

    def test_all_env_vars(self, monkeypatch):
        """Config loads all environment variables correctly."""
        monkeypatch.setenv("DRIP_MINT_AMOUNT", "5")
        monkeypatch.setenv("DRIP_COOLDOWN_SECONDS", "60")
        monkeypatch.setenv("DRIP_KEY_NAME", "shared")
        monkeypatch.setenv("DRIP_KEYRING_DIR", "/var/lib/drip")
        monkeypatch.setenv("DRIP_KEYRING_PASSWORD", "hunter2")
        monkeypatch.setenv("DRIP_NODE_URL", "http://node:1317")
        monkeypatch.setenv("REDIS_URL", "redis://redis:6379/1")
        monkeypatch.setenv("DRIP_STORE_PREFIX", "test:")
        monkeypatch.setenv("DRIP_METRICS_PORT", "9090")
        monkeypatch.setenv("DRIP_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("DRIP_LOG_FORMAT", "console")

        config = DripConfig()

        assert config.mint_amount == 5
        assert config.cooldown_seconds == 60
        assert config.key_name == "shared"
        assert config.keyring_dir == "/var/lib/drip"
        assert config.keyring_password.get_secret_value() == "hunter2"
        assert config.node_url == "http://node:1317"
        assert config.redis_url == "redis://redis:6379/1"
        assert config.store_prefix == "test:"
        assert config.metrics_port == 9090
        assert config.log_level == "DEBUG"
        assert config.log_format == "console"

    def test_password_not_in_repr(self, monkeypatch):
        """The keyring password is masked."""
        monkeypatch.setenv("DRIP_KEYRING_PASSWORD", "hunter2")

        assert "hunter2" not in repr(DripConfig())

    def test_zero_cooldown_allowed(self, monkeypatch):
        monkeypatch.setenv("DRIP_COOLDOWN_SECONDS", "0")

        assert DripConfig().cooldown_seconds == 0


class TestDripConfigValidation:
    """Test configuration validation."""

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("DRIP_MINT_AMOUNT", "0"),
            ("DRIP_MINT_AMOUNT", "-1"),
            ("DRIP_MINT_AMOUNT", "lots"),
            ("DRIP_COOLDOWN_SECONDS", "-1"),
            ("DRIP_KEY_NAME", ""),
            ("DRIP_METRICS_PORT", "0"),
            ("DRIP_METRICS_PORT", "70000"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        """Out-of-range values are rejected."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            DripConfig()
