"""
Base classes for remote ledger access.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union
import logging

from eth_utils import to_checksum_address

logger = logging.getLogger(__name__)

BlockIdentifier = Union[int, str]


@dataclass(frozen=True)
class LogEntry:
    """Read-only projection of an event log record."""
    address: str
    topics: Tuple[str, ...]
    block_number: int

    def __post_init__(self):
        object.__setattr__(self, "address", to_checksum_address(self.address))
        object.__setattr__(self, "topics", tuple(t.lower() for t in self.topics))

    @property
    def topic0(self) -> Optional[str]:
        """First topic (the event signature hash) if present."""
        return self.topics[0] if self.topics else None


class LedgerClient(ABC):
    """
    Abstract interface to a chain RPC endpoint.

    Implementations own transport concerns (retries, timeouts); callers
    only see the four capabilities below.
    """

    def __init__(self, rpc_url: str):
        """
        Initialize client.

        Args:
            rpc_url: RPC endpoint URL
        """
        self.rpc_url = rpc_url
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    async def get_block_number(self) -> int:
        """
        Get the current chain height.

        Returns:
            int: Latest block number
        """
        pass

    @abstractmethod
    async def call(
        self, address: str, data: bytes, block: Optional[BlockIdentifier] = None
    ) -> bytes:
        """
        Execute a raw eth_call.

        Args:
            address: Contract address
            data: ABI-encoded call data (selector + arguments)
            block: Block to call at (latest if None)

        Returns:
            Raw return data
        """
        pass

    @abstractmethod
    async def get_logs(
        self, from_block: int, to_block: int, topics: Sequence[str]
    ) -> List[LogEntry]:
        """
        Query event logs in an inclusive block range.

        Args:
            from_block: First block of the range
            to_block: Last block of the range
            topics: Accepted values for topic0 (matched server-side)

        Returns:
            Logs emitted in the range
        """
        pass

    @abstractmethod
    async def query(
        self,
        address: str,
        abi: List[dict],
        method: str,
        args: Sequence[Any] = (),
        block: Optional[BlockIdentifier] = None,
    ) -> Any:
        """
        Call a contract method through its ABI and decode the result.

        Args:
            address: Contract address
            abi: Contract ABI definition
            method: Function name
            args: Function arguments
            block: Block to call at (latest if None)

        Returns:
            Decoded return value(s)
        """
        pass

    async def close(self) -> None:
        """Release transport resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def get_identifier(self) -> str:
        """Get unique identifier for this client."""
        return f"{self.__class__.__name__}({self.rpc_url})"
