"""
Pool discovery from a Uniswap V2 style factory.

Enumerates every pair the factory has created by index.
"""

from typing import Optional, Set

from ...contracts.errors import ContractCallError
from ...contracts.factory import FactoryContract
from ...fetchers.base import BlockIdentifier, LedgerClient
from ..base import BaseProcessor, DiscoveryError


class PoolDiscoveryProcessor(BaseProcessor):
    """Enumerate all pools known to a factory contract."""

    def __init__(self, client: LedgerClient, factory_address: str):
        super().__init__(client)
        try:
            self.factory = FactoryContract(client, factory_address)
        except ContractCallError as e:
            raise DiscoveryError(str(e)) from e

    async def process(self, block: Optional[BlockIdentifier] = None) -> Set[str]:
        """
        Collect the addresses of all pools created by the factory.

        Args:
            block: Block to enumerate at (latest if None)

        Returns:
            Set of checksummed pool addresses

        Raises:
            DiscoveryError: If the count or any indexed lookup fails
        """
        try:
            count = await self.factory.all_pairs_length(block)
        except Exception as e:
            raise DiscoveryError(
                f"Failed to read pool count from factory {self.factory.address}: {e}"
            ) from e

        self.logger.info(f"Factory {self.factory.address} reports {count} pools")

        pools = set()
        for index in range(count):
            try:
                pools.add(await self.factory.get_pair_by_index(index, block))
            except Exception as e:
                raise DiscoveryError(
                    f"Failed to read pool #{index} from factory {self.factory.address}: {e}"
                ) from e

            if (index + 1) % 1000 == 0:
                self.logger.debug(f"Enumerated {index + 1}/{count} pools")

        if len(pools) != count:
            self.logger.warning(f"Factory returned {count - len(pools)} duplicate pool addresses")

        self.logger.info(f"Discovered {len(pools)} pools")
        return pools
