"""
Token symbol cache.

Process-scoped: created empty for a run, filled while pools are loaded
and dropped when the run ends.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from ..models import SymbolKey

logger = logging.getLogger(__name__)


class SymbolCache(ABC):
    """
    Interface for token symbol caches keyed by (block, token).

    A key that is present with a None value means the symbol is known to be
    unresolvable at that block; a missing key means it was never looked up.
    """

    @abstractmethod
    def get(self, key: SymbolKey) -> Optional[str]:
        """Get a cached symbol (None for misses and cached failures)."""
        pass

    @abstractmethod
    def add(self, key: SymbolKey, symbol: Optional[str]) -> Optional[str]:
        """Store a symbol, returning the value it replaced."""
        pass

    @abstractmethod
    def __contains__(self, key: SymbolKey) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def lock_for(self, key: SymbolKey) -> asyncio.Lock:
        """
        Get the lock guarding lookups of ``key``.

        Holders may check the cache, query the chain and store the result
        without another task racing them for the same key.
        """
        pass


class InMemorySymbolCache(SymbolCache):
    """Dictionary backed symbol cache with per-key locks."""

    def __init__(self):
        self._symbols: Dict[SymbolKey, Optional[str]] = {}
        self._locks: Dict[SymbolKey, asyncio.Lock] = {}

    def get(self, key: SymbolKey) -> Optional[str]:
        return self._symbols.get(key)

    def add(self, key: SymbolKey, symbol: Optional[str]) -> Optional[str]:
        previous = self._symbols.get(key)
        self._symbols[key] = symbol
        return previous

    def __contains__(self, key: SymbolKey) -> bool:
        return key in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def lock_for(self, key: SymbolKey) -> asyncio.Lock:
        # No await between lookup and insert, so this is atomic on the event loop
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def clear(self) -> None:
        """Drop all cached symbols and locks."""
        logger.debug(f"Clearing symbol cache ({len(self._symbols)} entries)")
        self._symbols.clear()
        self._locks.clear()
