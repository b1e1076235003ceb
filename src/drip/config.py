"""Configuration management for DRIP using Pydantic Settings."""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DripConfig(BaseSettings):
    """DRIP configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Faucet policy
    mint_amount: int = Field(default=1, alias="DRIP_MINT_AMOUNT", gt=0)
    cooldown_seconds: int = Field(default=86400, alias="DRIP_COOLDOWN_SECONDS", ge=0)

    # Key ring
    key_name: str = Field(default="faucet", alias="DRIP_KEY_NAME", min_length=1)
    keyring_dir: str = Field(default="~/.drip/keyring", alias="DRIP_KEYRING_DIR")
    keyring_password: SecretStr | None = Field(default=None, alias="DRIP_KEYRING_PASSWORD")

    # Node
    node_url: str = Field(default="http://localhost:8080", alias="DRIP_NODE_URL")

    # Storage
    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    store_prefix: str = Field(default="drip:faucet:", alias="DRIP_STORE_PREFIX")

    # Observability
    metrics_port: int = Field(default=8080, alias="DRIP_METRICS_PORT", ge=1, le=65535)
    log_level: str = Field(default="INFO", alias="DRIP_LOG_LEVEL")
    log_format: str = Field(default="json", alias="DRIP_LOG_FORMAT")
