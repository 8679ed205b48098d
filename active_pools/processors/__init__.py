"""
Processors for the active pools snapshot pipeline.
"""

from .base import (
    BaseProcessor,
    DiscoveryError,
    PoolDataError,
    ProcessorError,
    ProcessorResult,
    ScanError,
)
from .pools import ActivityScanner, PoolDataLoader, PoolDiscoveryProcessor, iter_block_windows

__all__ = [
    'BaseProcessor',
    'DiscoveryError',
    'PoolDataError',
    'ProcessorError',
    'ProcessorResult',
    'ScanError',
    'ActivityScanner',
    'PoolDataLoader',
    'PoolDiscoveryProcessor',
    'iter_block_windows',
]
