"""
Configuration management for active pools snapshots.

Use get_config() to access all configuration settings.

Example:
    from active_pools.config import get_config

    config = get_config()

    # Access chain settings
    rpc_url = config.chains.CHAIN_RPC_URL

    # Access protocol settings
    factory = config.protocols.POOL_FACTORY_ADDRESS
    overrides = config.protocols.CHECKING_BLOCKS
"""

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .manager import ConfigManager, get_config, reload_config
from .protocols import ProtocolConfig, parse_checking_blocks

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "ProtocolConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
    "parse_checking_blocks",
]
