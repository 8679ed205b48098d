"""
Pool data loader.

Reads token addresses, declared reserves, token symbols and measured token
balances for each active pool. Every read for one pool targets that pool's
checking block, so a record is consistent as of a single block height.
"""

import asyncio
from typing import AbstractSet, Any, Dict, List, Mapping, Optional

from eth_utils import to_checksum_address

from ...contracts.erc20 import Erc20Contract
from ...contracts.errors import ErrorClass, classify_contract_error
from ...contracts.pair import PairContract
from ...core.models import DexPoolRecord, SymbolKey
from ...core.storage.symbol_cache import SymbolCache
from ...fetchers.base import LedgerClient
from ..base import BaseProcessor, PoolDataError


class PoolDataLoader(BaseProcessor):
    """
    Build one DexPoolRecord per active pool.

    Token calls that fail because the target has no such method (destroyed
    or non-conforming token) yield an absent symbol or a zero balance. Any
    other failure aborts the pool, and the run unless ``skip_failed_pools``
    is set.
    """

    def __init__(
        self,
        client: LedgerClient,
        symbol_cache: SymbolCache,
        pair_abi: List[dict],
        erc20_abi: List[dict],
        max_concurrency: int = 1,
        skip_failed_pools: bool = False,
        cache_failed_symbols: bool = False,
        progress_every: int = 100,
    ):
        """
        Initialize the loader.

        Args:
            client: Ledger client for contract reads
            symbol_cache: Cache shared by every pool of the run
            pair_abi: Pool contract ABI
            erc20_abi: Token contract ABI
            max_concurrency: Pools loaded at the same time (1 = sequential)
            skip_failed_pools: Log and skip pools that fail instead of aborting
            cache_failed_symbols: Remember unresolvable symbols as None
            progress_every: Log progress after this many pools
        """
        super().__init__(client)
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.symbol_cache = symbol_cache
        self.pair_abi = pair_abi
        self.erc20_abi = erc20_abi
        self.max_concurrency = max_concurrency
        self.skip_failed_pools = skip_failed_pools
        self.cache_failed_symbols = cache_failed_symbols
        self.progress_every = progress_every

        self.skipped_pools: List[str] = []
        self._done = 0
        self._total = 0

    async def get_token_symbol(self, token_address: str, block: int) -> Optional[str]:
        """
        Get a token symbol at ``block``, going through the symbol cache.

        Returns:
            The symbol, or None if the token cannot answer symbol()
        """
        key = SymbolKey(block, to_checksum_address(token_address))

        async with self.symbol_cache.lock_for(key):
            if key in self.symbol_cache:
                return self.symbol_cache.get(key)

            token = Erc20Contract(self.client, key.token_address, self.erc20_abi)
            try:
                symbol = await token.get_symbol(block)
            except Exception as e:
                if classify_contract_error(e) is ErrorClass.FATAL:
                    raise
                self.logger.warning(
                    f"Failed to get token symbol at contract {key.token_address} by block {block}: {e}"
                )
                if self.cache_failed_symbols:
                    self.symbol_cache.add(key, None)
                return None

            self.symbol_cache.add(key, symbol)
            return symbol

    async def get_token_balance(self, token_address: str, owner: str, block: int) -> int:
        """
        Get ``owner``'s balance of a token at ``block``.

        Returns:
            The balance, or 0 if the token cannot answer balanceOf()
        """
        token = Erc20Contract(self.client, token_address, self.erc20_abi)
        try:
            return await token.balance_of(owner, block)
        except Exception as e:
            if classify_contract_error(e) is ErrorClass.FATAL:
                raise
            self.logger.warning(
                f"Failed to get balance of {owner} at contract {token.address} by block {block}, using 0: {e}"
            )
            return 0

    async def load_pool(self, pool_address: str, block: int) -> DexPoolRecord:
        """
        Read one pool at ``block``.

        Raises:
            PoolDataError: On any failure not classified as recoverable
        """
        try:
            pair = PairContract(self.client, pool_address, self.pair_abi)
            token0, token1 = await pair.get_token_addresses(block)
            reserve0, reserve1 = await pair.get_reserves(block)
            symbol0 = await self.get_token_symbol(token0, block)
            symbol1 = await self.get_token_symbol(token1, block)
            balance0 = await self.get_token_balance(token0, pair.address, block)
            balance1 = await self.get_token_balance(token1, pair.address, block)
        except Exception as e:
            self.logger.error(f"Contract error for pool {pool_address} at block {block}: {e}")
            raise PoolDataError(
                f"Failed to load pool {pool_address} at block {block}: {e}", pool_address
            ) from e

        record = DexPoolRecord(
            pair_address=pair.address,
            token0_address=token0,
            token1_address=token1,
            token0_symbol=symbol0,
            token1_symbol=symbol1,
            token0_reserves=reserve0,
            token1_reserves=reserve1,
            token0_reserve_balance_of=balance0,
            token1_reserve_balance_of=balance1,
            block_num=block,
        )

        if record.strange_reserves:
            self.logger.warning(
                f"Strange reserves in pool {record.pair_address} at block {block}: "
                f"reserves ({reserve0}, {reserve1}) != balances ({balance0}, {balance1})"
            )
        return record

    async def _load_one(self, pool_address: str, block: int) -> Optional[DexPoolRecord]:
        try:
            record = await self.load_pool(pool_address, block)
        except PoolDataError:
            if not self.skip_failed_pools:
                raise
            self.logger.warning(f"Skipping pool {pool_address}")
            self.skipped_pools.append(pool_address)
            record = None

        self._done += 1
        if self._done % self.progress_every == 0:
            self.logger.info(f"Processed {self._done}/{self._total} pools")
        return record

    async def _load_concurrently(self, jobs: List[tuple]) -> List[Optional[DexPoolRecord]]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def worker(pool_address: str, block: int) -> Optional[DexPoolRecord]:
            async with semaphore:
                return await self._load_one(pool_address, block)

        tasks = [asyncio.create_task(worker(pool, block)) for pool, block in jobs]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def load(
        self,
        pools: AbstractSet[str],
        fallback_block: int,
        checking_blocks: Optional[Mapping[str, int]] = None,
    ) -> List[DexPoolRecord]:
        """
        Load every pool in ``pools``.

        Args:
            pools: Active pool addresses
            fallback_block: Block used for pools without an override
            checking_blocks: Per-pool block overrides keyed by address

        Returns:
            Records in pool address order

        Raises:
            PoolDataError: If a pool fails and skipping is disabled
        """
        overrides = {to_checksum_address(k): v for k, v in (checking_blocks or {}).items()}
        jobs = []
        for pool in sorted(to_checksum_address(p) for p in pools):
            jobs.append((pool, overrides.get(pool, fallback_block)))

        self.skipped_pools = []
        self._done = 0
        self._total = len(jobs)
        self.logger.info(
            f"Loading {self._total} pools at block {fallback_block} "
            f"({len(overrides)} overrides, concurrency {self.max_concurrency})"
        )

        if self.max_concurrency == 1:
            results = [await self._load_one(pool, block) for pool, block in jobs]
        else:
            results = await self._load_concurrently(jobs)

        records = [record for record in results if record is not None]
        strange = sum(1 for record in records if record.strange_reserves)
        self.logger.info(
            f"Loaded {len(records)} pools ({strange} with strange reserves, "
            f"{len(self.skipped_pools)} skipped)"
        )
        return records

    def get_stats(self) -> Dict[str, Any]:
        """Counters of the last load."""
        return {
            "processed": self._done,
            "total": self._total,
            "skipped_pools": list(self.skipped_pools),
            "cached_symbols": len(self.symbol_cache),
        }

    async def process(self, **kwargs) -> List[DexPoolRecord]:
        return await self.load(**kwargs)
