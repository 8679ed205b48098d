"""
Domain models for active pool snapshots.
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

from eth_utils import to_checksum_address


class SymbolKey(NamedTuple):
    """Cache key for a token symbol read at a given block."""
    block_number: int
    token_address: str


@dataclass(frozen=True)
class DexPoolRecord:
    """
    Snapshot of one pool at a single block.

    Attributes:
        pair_address: Pool contract address
        token0_address: First token of the pair
        token1_address: Second token of the pair
        token0_symbol: Symbol of token0, None when it could not be resolved
        token1_symbol: Symbol of token1, None when it could not be resolved
        token0_reserves: Reserve of token0 declared by the pool
        token1_reserves: Reserve of token1 declared by the pool
        token0_reserve_balance_of: token0.balanceOf(pool)
        token1_reserve_balance_of: token1.balanceOf(pool)
        block_num: Block every field was read at
    """

    pair_address: str
    token0_address: str
    token1_address: str
    token0_symbol: Optional[str]
    token1_symbol: Optional[str]
    token0_reserves: int
    token1_reserves: int
    token0_reserve_balance_of: int
    token1_reserve_balance_of: int
    block_num: int

    @property
    def strange_reserves(self) -> bool:
        """True when declared reserves differ from measured balances."""
        return (
            self.token0_reserves != self.token0_reserve_balance_of
            or self.token1_reserves != self.token1_reserve_balance_of
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form; big integers become decimal strings."""
        return {
            "pair_address": to_checksum_address(self.pair_address),
            "token0_address": to_checksum_address(self.token0_address),
            "token1_address": to_checksum_address(self.token1_address),
            "token0_symbol": self.token0_symbol,
            "token1_symbol": self.token1_symbol,
            "token0_reserves": str(self.token0_reserves),
            "token1_reserves": str(self.token1_reserves),
            "token0_reserve_balance_of": str(self.token0_reserve_balance_of),
            "token1_reserve_balance_of": str(self.token1_reserve_balance_of),
            "block_num": self.block_num,
            "strange_reserves": self.strange_reserves,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DexPoolRecord":
        """Rebuild a record from its to_dict() form; strange_reserves is recomputed."""
        return cls(
            pair_address=to_checksum_address(data["pair_address"]),
            token0_address=to_checksum_address(data["token0_address"]),
            token1_address=to_checksum_address(data["token1_address"]),
            token0_symbol=data.get("token0_symbol"),
            token1_symbol=data.get("token1_symbol"),
            token0_reserves=int(data["token0_reserves"]),
            token1_reserves=int(data["token1_reserves"]),
            token0_reserve_balance_of=int(data["token0_reserve_balance_of"]),
            token1_reserve_balance_of=int(data["token1_reserve_balance_of"]),
            block_num=int(data["block_num"]),
        )
