"""
Configuration management for the Algorand deployer.

Supports configuration via environment variables and .env files.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetworkType(str, Enum):
    """Algorand network types."""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    BETANET = "betanet"
    PRIVATE = "private"


class DeployerConfig(BaseSettings):
    """
    Configuration settings for the deployer.

    All settings can be configured via environment variables with the ALGODEPLOY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALGODEPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Network settings
    network: NetworkType = Field(
        default=NetworkType.PRIVATE,
        description="Algorand network to connect to"
    )

    # Algod settings
    algod_address: Optional[str] = Field(
        default=None,
        description="Custom algod base URL (optional)"
    )
    algod_token: str = Field(
        default="",
        description="Algod API token"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single algod HTTP request"
    )

    # Confirmation settings
    wait_rounds: int = Field(
        default=10,
        ge=1,
        description="Rounds to wait for a submitted transaction before giving up"
    )

    # Signed transaction files
    assets_dir: str = Field(
        default="assets",
        description="Directory that relative signed transaction paths resolve against"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    @property
    def algod_url(self) -> str:
        """Get the appropriate algod URL based on network."""
        if self.algod_address:
            return self.algod_address

        network_urls = {
            NetworkType.MAINNET: "https://mainnet-api.algonode.cloud",
            NetworkType.TESTNET: "https://testnet-api.algonode.cloud",
            NetworkType.BETANET: "https://betanet-api.algonode.cloud",
        }
        return network_urls.get(self.network, "http://localhost:4001")


# Global config instance
_config: Optional[DeployerConfig] = None


def get_config() -> DeployerConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DeployerConfig()
    return _config


def set_config(config: DeployerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
