"""
Swap activity scanner.

Splits a block range into contiguous windows, pulls swap logs for each
window filtered by topic only, and keeps the emitters that are known pools.
"""

from typing import AbstractSet, Iterator, Set, Tuple

from eth_utils import to_checksum_address

from ...fetchers.base import LedgerClient
from ..base import BaseProcessor, ScanError


def iter_block_windows(start_block: int, end_block: int, window_size: int) -> Iterator[Tuple[int, int]]:
    """
    Yield inclusive (from, to) windows covering [start_block, end_block].

    Windows are contiguous and never overlap. Nothing is yielded when
    start_block > end_block.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    from_block = start_block
    while from_block <= end_block:
        to_block = min(from_block + window_size, end_block)
        yield from_block, to_block
        from_block = to_block + 1


class ActivityScanner(BaseProcessor):
    """Find the pools that emitted a swap event in a block range."""

    def __init__(self, client: LedgerClient, window_size: int = 2000):
        super().__init__(client)
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self.window_size = window_size

    async def scan(
        self,
        pools: AbstractSet[str],
        start_block: int,
        end_block: int,
        swap_topic: str,
    ) -> Set[str]:
        """
        Return the subset of ``pools`` that emitted ``swap_topic`` in the range.

        Raises:
            ScanError: If any log query fails
        """
        known = {to_checksum_address(pool) for pool in pools}
        active: Set[str] = set()
        windows = 0

        # Address lists are not sent to the node, filtering happens here
        for from_block, to_block in iter_block_windows(start_block, end_block, self.window_size):
            try:
                logs = await self.client.get_logs(from_block, to_block, [swap_topic])
            except Exception as e:
                raise ScanError(f"Log query for blocks {from_block}-{to_block} failed: {e}") from e

            windows += 1
            for log in logs:
                if log.address in known:
                    active.add(log.address)

            self.logger.debug(
                f"Blocks {from_block}-{to_block}: {len(logs)} logs, {len(active)} active pools so far"
            )

        self.logger.info(
            f"Scanned blocks {start_block}-{end_block} in {windows} windows: "
            f"{len(active)}/{len(known)} pools active"
        )
        return active

    async def process(self, **kwargs) -> Set[str]:
        return await self.scan(**kwargs)
