"""
web3.py backed ledger client.

Talks to a JSON-RPC endpoint through AsyncWeb3 and retries transient
failures with exponential backoff.
"""

import asyncio
from typing import Any, List, Optional, Sequence

from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3

from ..contracts.errors import ErrorHandler
from .base import BlockIdentifier, LedgerClient, LogEntry


def _topic_hex(topic) -> str:
    if isinstance(topic, str):
        return topic.lower()
    return "0x" + bytes(topic).hex()


class Web3LedgerClient(LedgerClient):
    """
    Ledger client for an EVM JSON-RPC endpoint.

    Only network, rate-limit and unclassified errors are retried; contract
    level failures are deterministic and surface on the first attempt.
    """

    def __init__(
        self,
        rpc_url: str,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        web3: Optional[AsyncWeb3] = None,
    ):
        """
        Initialize the client.

        Args:
            rpc_url: RPC endpoint URL
            max_retries: Attempts per request (including the first one)
            retry_delay: Base delay for exponential backoff in seconds
            web3: Pre-built AsyncWeb3 instance (built from rpc_url if None)
        """
        super().__init__(rpc_url)
        self.web3 = web3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.error_handler = ErrorHandler(self.logger)

    @staticmethod
    def _block_id(block: Optional[BlockIdentifier]) -> BlockIdentifier:
        return "latest" if block is None else block

    async def _retry_operation(self, operation, *args, **kwargs) -> Any:
        """Retry an operation with exponential backoff and error classification."""
        for attempt in range(self.max_retries):
            try:
                return await operation(*args, **kwargs)
            except Exception as e:
                self.error_handler.log_error(
                    e,
                    {
                        "attempt": attempt + 1,
                        "max_retries": self.max_retries,
                        "operation": getattr(operation, "__name__", str(operation)),
                    },
                )

                if not self.error_handler.should_retry(e, attempt, self.max_retries):
                    raise

                delay = self.error_handler.get_retry_delay(e, attempt, self.retry_delay)
                self.logger.info(
                    f"Retrying in {delay}s... (attempt {attempt + 1}/{self.max_retries})"
                )
                await asyncio.sleep(delay)

    async def _block_number(self) -> int:
        return await self.web3.eth.block_number

    async def get_block_number(self) -> int:
        return int(await self._retry_operation(self._block_number))

    async def call(
        self, address: str, data: bytes, block: Optional[BlockIdentifier] = None
    ) -> bytes:
        transaction = {"to": to_checksum_address(address), "data": HexBytes(data)}
        result = await self._retry_operation(
            self.web3.eth.call, transaction, block_identifier=self._block_id(block)
        )
        return bytes(result)

    async def get_logs(
        self, from_block: int, to_block: int, topics: Sequence[str]
    ) -> List[LogEntry]:
        filter_params = {
            "fromBlock": from_block,
            "toBlock": to_block,
            "topics": [[_topic_hex(t) for t in topics]],
        }
        raw_logs = await self._retry_operation(self.web3.eth.get_logs, filter_params)

        return [
            LogEntry(
                address=raw_log["address"],
                topics=tuple(_topic_hex(t) for t in raw_log["topics"]),
                block_number=int(raw_log["blockNumber"]),
            )
            for raw_log in raw_logs
        ]

    async def query(
        self,
        address: str,
        abi: List[dict],
        method: str,
        args: Sequence[Any] = (),
        block: Optional[BlockIdentifier] = None,
    ) -> Any:
        contract = self.web3.eth.contract(address=to_checksum_address(address), abi=abi)
        # Raises ABIFunctionNotFound when the ABI has no such method
        function = contract.functions[method](*args)
        return await self._retry_operation(
            function.call, block_identifier=self._block_id(block)
        )

    async def close(self) -> None:
        await self.web3.provider.disconnect()
