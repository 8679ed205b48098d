"""
Chain connection configuration for active pools snapshots.
"""

from dataclasses import dataclass, field
from typing import Dict

from .base import BaseConfig, ConfigError


@dataclass
class ChainConfig(BaseConfig):
    """Connection and request tuning for the chain RPC endpoint."""

    CHAIN_RPC_URL: str = field(
        default_factory=lambda: BaseConfig.get_env("CHAIN_RPC_URL", "http://localhost:8545")
    )

    # Blocks covered by one eth_getLogs request (window is [from, from + size])
    LOG_BULK_SIZE: int = field(
        default_factory=lambda: BaseConfig.get_env_int("LOG_BULK_SIZE", 2000)
    )

    # Retry settings for transient RPC failures
    MAX_RETRY_ATTEMPTS: int = field(
        default_factory=lambda: BaseConfig.get_env_int("MAX_RETRY_ATTEMPTS", 3)
    )
    RETRY_DELAY_SECONDS: float = field(
        default_factory=lambda: BaseConfig.get_env_float("RETRY_DELAY_SECONDS", 1.0)
    )

    # Pools loaded in parallel; 1 keeps the sequential behaviour
    MAX_CONCURRENT_POOLS: int = field(
        default_factory=lambda: BaseConfig.get_env_int("MAX_CONCURRENT_POOLS", 1)
    )

    def _validate_config(self):
        super()._validate_config()
        if not self.CHAIN_RPC_URL.startswith(("http://", "https://")):
            raise ConfigError(f"CHAIN_RPC_URL must be an http(s) url, got: {self.CHAIN_RPC_URL}")
        if self.LOG_BULK_SIZE < 1:
            raise ConfigError(f"LOG_BULK_SIZE must be positive, got: {self.LOG_BULK_SIZE}")
        if self.MAX_RETRY_ATTEMPTS < 1:
            raise ConfigError(f"MAX_RETRY_ATTEMPTS must be positive, got: {self.MAX_RETRY_ATTEMPTS}")
        if self.MAX_CONCURRENT_POOLS < 1:
            raise ConfigError(
                f"MAX_CONCURRENT_POOLS must be positive, got: {self.MAX_CONCURRENT_POOLS}"
            )

    def get_client_config(self) -> Dict:
        """Get keyword arguments for the ledger client."""
        return {
            "rpc_url": self.CHAIN_RPC_URL,
            "max_retries": self.MAX_RETRY_ATTEMPTS,
            "retry_delay": self.RETRY_DELAY_SECONDS,
        }
