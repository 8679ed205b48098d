"""
Active pool snapshot pipeline.

This module orchestrates one snapshot run:
1. Discovery - enumerate every pool of the factory
2. Activity - keep pools that emitted a swap event in the block range
3. Loading - read tokens, reserves, symbols and balances per pool
4. Output - write the records as one JSON array
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from ...config.manager import ConfigManager, get_config
from ...contracts.base import load_abi
from ...core.storage.address_list import load_pool_addresses, save_pool_addresses
from ...core.storage.json_storage import JsonStorage
from ...core.storage.symbol_cache import InMemorySymbolCache
from ...fetchers.base import LedgerClient
from ...fetchers.web3_fetcher import Web3LedgerClient
from ..base import ProcessorResult
from ..pools.activity_scanner import ActivityScanner
from ..pools.pool_data_loader import PoolDataLoader
from ..pools.pool_discovery import PoolDiscoveryProcessor

logger = logging.getLogger(__name__)


class ActivePoolsPipeline:
    """
    Pipeline producing a point-in-time snapshot of active pools.

    A fresh symbol cache is used for every run. The ledger client is closed
    at the end of a run only if the pipeline created it.
    """

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        client: Optional[LedgerClient] = None,
        window_size: Optional[int] = None,
        max_concurrency: Optional[int] = None,
        skip_failed_pools: Optional[bool] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Configuration (global configuration if None)
            client: Ledger client (built from the chain configuration if None)
            window_size: Override of LOG_BULK_SIZE
            max_concurrency: Override of MAX_CONCURRENT_POOLS
            skip_failed_pools: Override of SKIP_FAILED_POOLS
        """
        self.config = config or get_config()
        self._owns_client = client is None
        self.client = client or Web3LedgerClient(**self.config.chains.get_client_config())

        chains = self.config.chains
        protocols = self.config.protocols
        self.window_size = window_size if window_size is not None else chains.LOG_BULK_SIZE
        self.max_concurrency = (
            max_concurrency if max_concurrency is not None else chains.MAX_CONCURRENT_POOLS
        )
        self.skip_failed_pools = (
            skip_failed_pools if skip_failed_pools is not None else protocols.SKIP_FAILED_POOLS
        )

        self.pair_abi = load_abi(protocols.PAIR_ABI_PATH)
        self.erc20_abi = load_abi(protocols.ERC20_ABI_PATH)
        logger.info(f"ActivePoolsPipeline initialized with {self.client.get_identifier()}")

    async def find_active_pools(self, start_block: int, end_block: int) -> Set[str]:
        """Discover the factory's pools and keep those with swaps in the range."""
        protocols = self.config.protocols

        discovery = PoolDiscoveryProcessor(self.client, protocols.POOL_FACTORY_ADDRESS)
        pools = await discovery.process(block=end_block)

        scanner = ActivityScanner(self.client, self.window_size)
        return await scanner.scan(pools, start_block, end_block, protocols.SWAP_TOPIC0)

    async def run(
        self,
        start_block: Optional[int] = None,
        end_block: Optional[int] = None,
        pools_file: Optional[Union[str, Path]] = None,
        output_path: Optional[Union[str, Path]] = None,
        save_pools_file: Optional[Union[str, Path]] = None,
    ) -> Dict[str, Any]:
        """
        Run a full snapshot.

        Args:
            start_block: First block of the activity range (ACTIVE_POOLS_START_BLOCK if None)
            end_block: Last block of the range and default checking block (chain height if None)
            pools_file: Read the active pool set from this file instead of scanning
            output_path: Result file (OUTPUT_DIR/pools_data_<start>_<end>.json if None)
            save_pools_file: Also write the active pool set to this file

        Returns:
            Result dictionary with success, processed_count, output_path and metadata
        """
        protocols = self.config.protocols
        if start_block is None:
            start_block = protocols.ACTIVE_POOLS_START_BLOCK

        symbol_cache = InMemorySymbolCache()
        try:
            if end_block is None:
                end_block = await self.client.get_block_number()
            logger.info(f"Snapshot of blocks {start_block} → {end_block}")

            if pools_file:
                active_pools = load_pool_addresses(pools_file)
            else:
                active_pools = await self.find_active_pools(start_block, end_block)
                if save_pools_file:
                    save_pool_addresses(save_pools_file, active_pools)

            loader = PoolDataLoader(
                self.client,
                symbol_cache,
                self.pair_abi,
                self.erc20_abi,
                max_concurrency=self.max_concurrency,
                skip_failed_pools=self.skip_failed_pools,
                cache_failed_symbols=protocols.CACHE_FAILED_SYMBOLS,
            )
            records = await loader.load(active_pools, end_block, protocols.CHECKING_BLOCKS)

            if output_path is None:
                output_path = f"pools_data_{start_block}_{end_block}.json"
            async with JsonStorage({"base_path": self.config.base.OUTPUT_DIR}) as storage:
                written = storage.save_pool_records(output_path, records)

            stats = loader.get_stats()
        finally:
            symbol_cache.clear()
            if self._owns_client:
                await self.client.close()

        result = ProcessorResult(
            success=True,
            processed_count=len(records),
            output_path=str(written),
            metadata={
                "start_block": start_block,
                "end_block": end_block,
                "active_pools": len(active_pools),
                "strange_reserves": sum(1 for record in records if record.strange_reserves),
                "skipped_pools": stats["skipped_pools"],
                "cached_symbols": stats["cached_symbols"],
            },
        )
        return result.to_dict()
