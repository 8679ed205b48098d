"""
Storage errors and the interface for pool snapshot stores.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from ..models import DexPoolRecord

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for storage errors."""
    pass


class DataError(StorageError):
    """Raised when a dataset cannot be written, read or parsed."""
    pass


class StorageBase(ABC):
    """
    Store for pool snapshot datasets.

    Usable as an async context manager that connects on entry and
    disconnects on exit.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.is_connected = False

    @abstractmethod
    async def connect(self) -> None:
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    def save_pool_records(
        self, name: Union[str, Path], records: Sequence[DexPoolRecord]
    ) -> Path:
        """Persist one snapshot, returning where it was written."""
        pass

    @abstractmethod
    def load_pool_records(self, name: Union[str, Path]) -> Optional[List[DexPoolRecord]]:
        """Read a snapshot back, None if it does not exist."""
        pass

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
