"""
Uniswap V2 style pair contract.
"""

from typing import Optional, Tuple

from eth_utils import to_checksum_address

from ..fetchers.base import BlockIdentifier
from .base import ContractBase


class PairContract(ContractBase):
    """Token and reserve reads on a pair contract."""

    async def get_token_addresses(self, block: Optional[BlockIdentifier] = None) -> Tuple[str, str]:
        """Get (token0, token1) addresses."""
        token0 = await self._query("token0", block=block)
        token1 = await self._query("token1", block=block)
        return to_checksum_address(token0), to_checksum_address(token1)

    async def get_reserves(self, block: Optional[BlockIdentifier] = None) -> Tuple[int, int]:
        """Get (reserve0, reserve1); the last-update timestamp is dropped."""
        reserve0, reserve1, _ = await self._query("getReserves", block=block)
        return int(reserve0), int(reserve1)
