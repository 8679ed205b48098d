"""
ERC20 token contract.
"""

from typing import Optional

from eth_utils import to_checksum_address

from ..fetchers.base import BlockIdentifier
from .base import ContractBase


class Erc20Contract(ContractBase):
    """Symbol and balance reads on an ERC20 token."""

    async def get_symbol(self, block: Optional[BlockIdentifier] = None) -> str:
        return await self._query("symbol", block=block)

    async def balance_of(self, owner: str, block: Optional[BlockIdentifier] = None) -> int:
        return int(await self._query("balanceOf", to_checksum_address(owner), block=block))
