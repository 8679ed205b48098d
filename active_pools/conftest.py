"""
Shared fixtures: an in-memory ledger client and pool/token builders.
"""

import inspect
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from eth_abi import encode
from eth_utils import to_checksum_address

from active_pools.config.protocols import ABI_DIR
from active_pools.contracts.base import load_abi
from active_pools.contracts.factory import ALL_PAIRS_LENGTH_SELECTOR, ALL_PAIRS_SELECTOR
from active_pools.core.storage.symbol_cache import InMemorySymbolCache
from active_pools.fetchers.base import LedgerClient, LogEntry

SWAP_TOPIC = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"
OTHER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def make_address(n: int) -> str:
    return to_checksum_address(f"0x{n:040x}")


class FakeLedgerClient(LedgerClient):
    """
    Ledger client answering from in-memory tables.

    Responses are keyed by (address, method). A response may be a value,
    an exception instance (raised) or a callable taking (args, block).
    """

    def __init__(self, block_number: int = 1000):
        super().__init__("memory://")
        self.block_number = block_number
        self.logs: List[LogEntry] = []
        self.log_error: Optional[Exception] = None
        self.responses: Dict[Tuple[str, str], Any] = {}
        self.raw_responses: Dict[Tuple[str, bytes], Any] = {}
        self.queries: List[Tuple[str, str, tuple, Any]] = []
        self.raw_calls: List[Tuple[str, bytes, Any]] = []
        self.log_queries: List[Tuple[int, int, Tuple[str, ...]]] = []
        self.closed = False

    @staticmethod
    def _resolve(response: Any, args: tuple, block: Any) -> Any:
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(args, block)
        return response

    async def get_block_number(self) -> int:
        return self.block_number

    async def call(self, address: str, data: bytes, block=None) -> bytes:
        address = to_checksum_address(address)
        self.raw_calls.append((address, bytes(data), block))
        key = (address, bytes(data))
        if key not in self.raw_responses:
            raise AssertionError(f"Unexpected call to {address} with data 0x{bytes(data).hex()}")
        return self._resolve(self.raw_responses[key], (), block)

    async def get_logs(self, from_block: int, to_block: int, topics: Sequence[str]) -> List[LogEntry]:
        topics = tuple(t.lower() for t in topics)
        self.log_queries.append((from_block, to_block, topics))
        if self.log_error is not None:
            raise self.log_error
        return [
            log for log in self.logs
            if from_block <= log.block_number <= to_block and log.topic0 in topics
        ]

    async def query(self, address: str, abi, method: str, args=(), block=None) -> Any:
        address = to_checksum_address(address)
        args = tuple(args)
        self.queries.append((address, method, args, block))
        key = (address, method)
        if key not in self.responses:
            raise AssertionError(f"Unexpected query {method} on {address}")
        result = self._resolve(self.responses[key], args, block)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def close(self) -> None:
        self.closed = True

    # Builders

    def add_factory(self, factory: str, pools: Sequence[str]) -> None:
        factory = to_checksum_address(factory)
        self.raw_responses[(factory, ALL_PAIRS_LENGTH_SELECTOR)] = encode(["uint256"], [len(pools)])
        for index, pool in enumerate(pools):
            data = ALL_PAIRS_SELECTOR + encode(["uint256"], [index])
            self.raw_responses[(factory, data)] = encode(["address"], [pool])

    def add_token(self, token: str, symbol: Any, balances: Optional[Dict[str, Any]] = None) -> None:
        token = to_checksum_address(token)
        self.responses[(token, "symbol")] = symbol
        balances = {to_checksum_address(k): v for k, v in (balances or {}).items()}

        def balance_of(args, block):
            return self._resolve(balances.get(args[0], 0), args, block)

        self.responses[(token, "balanceOf")] = balance_of

    def add_pool(self, pool: str, token0: str, token1: str, reserves: Tuple[int, int]) -> None:
        pool = to_checksum_address(pool)
        self.responses[(pool, "token0")] = to_checksum_address(token0).lower()
        self.responses[(pool, "token1")] = to_checksum_address(token1).lower()
        self.responses[(pool, "getReserves")] = [reserves[0], reserves[1], 1700000000]

    def add_log(self, address: str, block_number: int, topic0: str = SWAP_TOPIC) -> None:
        self.logs.append(LogEntry(address=address, topics=(topic0,), block_number=block_number))

    def queries_for(self, method: str) -> List[Tuple[str, str, tuple, Any]]:
        return [q for q in self.queries if q[1] == method]


@pytest.fixture
def fake_client() -> FakeLedgerClient:
    """Empty in-memory ledger client at block 1000."""
    return FakeLedgerClient()


@pytest.fixture
def addr() -> Callable[[int], str]:
    """Build deterministic checksummed addresses from integers."""
    return make_address


@pytest.fixture
def symbol_cache() -> InMemorySymbolCache:
    return InMemorySymbolCache()


@pytest.fixture
def pair_abi() -> List[dict]:
    return load_abi(ABI_DIR / "UniswapV2Pair.abi.json")


@pytest.fixture
def erc20_abi() -> List[dict]:
    return load_abi(ABI_DIR / "erc20.abi.json")


@pytest.fixture
def swap_topic() -> str:
    return SWAP_TOPIC


@pytest.fixture
def other_topic() -> str:
    return OTHER_TOPIC
