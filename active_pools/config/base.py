"""
Base configuration management for active pools snapshots.

Values come from the process environment, optionally seeded from a .env
file in the working directory.
"""

import os
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, List
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("local", "dev", "staging", "production")
TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigError(Exception):
    """Raised when a configuration value is missing or invalid."""
    pass


@dataclass
class BaseConfig:
    """Settings shared by every section, plus typed environment readers."""

    ENVIRONMENT: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "local"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Where result datasets are written
    OUTPUT_DIR: Path = field(
        default_factory=lambda: Path(os.getenv("OUTPUT_DIR", "./output"))
    )

    def __post_init__(self):
        self._setup_logging()
        self._validate_config()

    def _setup_logging(self):
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if not isinstance(level, int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    def _validate_config(self):
        """Check values; subclasses extend this and call super()."""
        if self.ENVIRONMENT not in ENVIRONMENTS:
            raise ConfigError(
                f"Invalid environment: {self.ENVIRONMENT} (expected one of {', '.join(ENVIRONMENTS)})"
            )

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Read a raw environment variable.

        Raises:
            ConfigError: If ``required`` and the variable is unset
        """
        value = os.getenv(key, default)
        if value is None and required:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def _get_typed(key: str, cast: Callable[[str], Any], default: Any, required: bool) -> Any:
        raw = BaseConfig.get_env(key, None if default is None else str(default), required)
        if raw is None:
            return None
        try:
            return cast(raw.strip())
        except ValueError:
            raise ConfigError(f"Environment variable '{key}' must be {cast.__name__}, got: {raw}")

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        return BaseConfig._get_typed(key, int, default, required)

    @staticmethod
    def get_env_float(key: str, default: Optional[float] = None, required: bool = False) -> float:
        return BaseConfig._get_typed(key, float, default, required)

    @staticmethod
    def get_env_bool(key: str, default: bool = False) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return raw.strip().lower() in TRUE_VALUES

    @staticmethod
    def get_env_list(key: str, separator: str = ",") -> List[str]:
        """Split a variable on ``separator``, dropping empty items."""
        raw = os.getenv(key) or ""
        return [item.strip() for item in raw.split(separator) if item.strip()]

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}
