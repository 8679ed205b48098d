"""
Uniswap V2 style factory contract.

Uses raw eth_call with fixed selectors so no factory ABI is needed.
"""

from typing import Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address

from ..fetchers.base import BlockIdentifier
from .base import ContractBase
from .errors import ContractCallError

# keccak("allPairsLength()")[:4]
ALL_PAIRS_LENGTH_SELECTOR = bytes.fromhex("574f2ba3")
# keccak("allPairs(uint256)")[:4]
ALL_PAIRS_SELECTOR = bytes.fromhex("1e3dd18b")


class FactoryContract(ContractBase):
    """Pair enumeration on a factory contract."""

    def _decode(self, abi_type: str, raw: bytes, method: str):
        try:
            return decode([abi_type], raw)[0]
        except DecodingError as e:
            raise ContractCallError(
                f"Malformed {method} response from factory {self.address}: {e}", self.address
            ) from e

    async def all_pairs_length(self, block: Optional[BlockIdentifier] = None) -> int:
        """Number of pairs created by the factory."""
        raw = await self.client.call(self.address, ALL_PAIRS_LENGTH_SELECTOR, block)
        return self._decode("uint256", raw, "allPairsLength")

    async def get_pair_by_index(self, index: int, block: Optional[BlockIdentifier] = None) -> str:
        """Address of the pair at ``index``."""
        data = ALL_PAIRS_SELECTOR + encode(["uint256"], [index])
        raw = await self.client.call(self.address, data, block)
        return to_checksum_address(self._decode("address", raw, "allPairs"))
