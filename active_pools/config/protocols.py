"""
Protocol-specific configuration for active pools snapshots.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from eth_utils import is_address, is_hex, to_checksum_address

from .base import BaseConfig, ConfigError

ABI_DIR = Path(__file__).parent.parent / "contracts" / "abi"


def parse_checking_blocks(entries) -> Dict[str, int]:
    """
    Parse per-pool checking block overrides.

    Args:
        entries: Items of the form ``<pool address>=<block number>``

    Returns:
        Mapping of checksummed pool address to block number
    """
    checking_blocks = {}
    for entry in entries:
        address, sep, block = entry.partition("=")
        address = address.strip()
        if not sep or not is_address(address):
            raise ConfigError(f"Invalid checking block entry: {entry}")
        try:
            block_number = int(block.strip())
        except ValueError:
            raise ConfigError(f"Invalid block number in checking block entry: {entry}")
        if block_number < 0:
            raise ConfigError(f"Negative block number in checking block entry: {entry}")
        checking_blocks[to_checksum_address(address)] = block_number
    return checking_blocks


@dataclass
class ProtocolConfig(BaseConfig):
    """Configuration for the DEX factory being snapshotted."""

    # Event Hashes (these are standard across chains)
    UNISWAP_V2_SWAP_EVENT: str = (
        "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"
    )
    UNISWAP_V2_FACTORY: str = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
    UNISWAP_V2_DEPLOYMENT_BLOCK: int = 10000835

    POOL_FACTORY_ADDRESS: str = field(
        default_factory=lambda: BaseConfig.get_env(
            "POOL_FACTORY_ADDRESS", ProtocolConfig.UNISWAP_V2_FACTORY
        )
    )
    SWAP_TOPIC0: str = field(
        default_factory=lambda: BaseConfig.get_env(
            "SWAP_TOPIC0", ProtocolConfig.UNISWAP_V2_SWAP_EVENT
        )
    )
    ACTIVE_POOLS_START_BLOCK: int = field(
        default_factory=lambda: BaseConfig.get_env_int(
            "ACTIVE_POOLS_START_BLOCK", ProtocolConfig.UNISWAP_V2_DEPLOYMENT_BLOCK
        )
    )
    CHECKING_BLOCKS: Dict[str, int] = field(
        default_factory=lambda: parse_checking_blocks(BaseConfig.get_env_list("CHECKING_BLOCKS"))
    )

    # Failure handling
    CACHE_FAILED_SYMBOLS: bool = field(
        default_factory=lambda: BaseConfig.get_env_bool("CACHE_FAILED_SYMBOLS", False)
    )
    SKIP_FAILED_POOLS: bool = field(
        default_factory=lambda: BaseConfig.get_env_bool("SKIP_FAILED_POOLS", False)
    )

    PAIR_ABI_PATH: Path = ABI_DIR / "UniswapV2Pair.abi.json"
    ERC20_ABI_PATH: Path = ABI_DIR / "erc20.abi.json"

    def _validate_config(self):
        super()._validate_config()
        if not is_address(self.POOL_FACTORY_ADDRESS):
            raise ConfigError(f"Invalid POOL_FACTORY_ADDRESS: {self.POOL_FACTORY_ADDRESS}")
        self.POOL_FACTORY_ADDRESS = to_checksum_address(self.POOL_FACTORY_ADDRESS)

        if not (is_hex(self.SWAP_TOPIC0) and len(self.SWAP_TOPIC0) == 66):
            raise ConfigError(f"SWAP_TOPIC0 must be a 32-byte 0x-prefixed hex string: {self.SWAP_TOPIC0}")
        self.SWAP_TOPIC0 = self.SWAP_TOPIC0.lower()

        if self.ACTIVE_POOLS_START_BLOCK < 0:
            raise ConfigError(
                f"ACTIVE_POOLS_START_BLOCK must not be negative, got: {self.ACTIVE_POOLS_START_BLOCK}"
            )
