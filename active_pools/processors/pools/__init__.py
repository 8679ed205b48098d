"""
Pool processors: discovery, swap activity scanning and data loading.
"""

from .activity_scanner import ActivityScanner, iter_block_windows
from .pool_data_loader import PoolDataLoader
from .pool_discovery import PoolDiscoveryProcessor

__all__ = [
    'ActivityScanner',
    'iter_block_windows',
    'PoolDataLoader',
    'PoolDiscoveryProcessor',
]
