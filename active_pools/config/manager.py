"""
Configuration manager for active pools snapshots.

Bundles the base, chain and protocol sections read from the environment and
exposes them through one object shared by the pipeline and the CLI.
"""

import logging
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .protocols import ProtocolConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    All configuration sections of a snapshot run.

    Sections are built eagerly so an invalid environment fails at startup
    rather than halfway through a scan.
    """

    def __init__(self, environment: Optional[str] = None):
        """
        Args:
            environment: Override ENVIRONMENT (local, dev, staging, production)
        """
        try:
            self._sections = {
                "base": BaseConfig(),
                "chains": ChainConfig(),
                "protocols": ProtocolConfig(),
            }
        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to read configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}") from e

        if environment:
            self.base.ENVIRONMENT = environment
            self.base._validate_config()

        logger.info(f"Configuration loaded for environment: {self.environment}")

    @property
    def environment(self) -> str:
        return self.base.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        return self._sections["base"]

    @property
    def chains(self) -> ChainConfig:
        return self._sections["chains"]

    @property
    def protocols(self) -> ProtocolConfig:
        return self._sections["protocols"]

    def validate_configuration(self) -> bool:
        """
        Re-run validation of every section.

        Raises:
            ConfigError: If a section holds an invalid value
        """
        for section in self._sections.values():
            section._validate_config()

        overrides = self.protocols.CHECKING_BLOCKS
        if overrides:
            logger.info(f"{len(overrides)} pools have a checking block override")
        else:
            logger.info("No checking block overrides, pools are read at the end block")
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary of every section, for logging run settings."""
        data: Dict[str, Any] = {"environment": self.environment}
        data.update({name: section.to_dict() for name, section in self._sections.items()})
        return data

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment}, rpc={self.chains.CHAIN_RPC_URL})"


_config_manager: Optional[ConfigManager] = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """Get the process-wide configuration, building it on first use."""
    global _config_manager

    if _config_manager is None or force_reload:
        config = ConfigManager(environment=environment)
        config.validate_configuration()
        _config_manager = config

    return _config_manager


def reload_config(environment: Optional[str] = None) -> ConfigManager:
    """Re-read configuration from the environment."""
    return get_config(environment=environment, force_reload=True)
