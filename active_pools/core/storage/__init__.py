"""
Storage for pool snapshots: the run-scoped symbol cache, JSON result
files and plain text pool address lists.
"""

from .address_list import load_pool_addresses, save_pool_addresses
from .base import DataError, StorageBase, StorageError
from .json_storage import JsonStorage
from .symbol_cache import InMemorySymbolCache, SymbolCache

__all__ = [
    'DataError',
    'StorageBase',
    'StorageError',
    'JsonStorage',
    'InMemorySymbolCache',
    'SymbolCache',
    'load_pool_addresses',
    'save_pool_addresses',
]
