"""
Base processor classes for data pipeline components.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional
import logging

from ..fetchers.base import LedgerClient

logger = logging.getLogger(__name__)


class ProcessorError(Exception):
    """Base exception for processor errors."""
    pass


class DiscoveryError(ProcessorError):
    """Raised when the factory pool list cannot be fully enumerated."""
    pass


class ScanError(ProcessorError):
    """Raised when a log query fails; no partial activity set is returned."""
    pass


class PoolDataError(ProcessorError):
    """Raised when a pool's data cannot be loaded."""

    def __init__(self, message: str, pool_address: str):
        super().__init__(message)
        self.pool_address = pool_address


@dataclass
class ProcessorResult:
    """Result from pipeline execution."""
    success: bool
    processed_count: int = 0
    output_path: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BaseProcessor(ABC):
    """
    Abstract base class for chain processors.

    Each processor handles one step of the active pool pipeline and reaches
    the chain only through the ledger client it was given.
    """

    def __init__(self, client: LedgerClient):
        """
        Initialize processor.

        Args:
            client: Ledger client used for every remote call
        """
        self.client = client
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    async def process(self, **kwargs) -> Any:
        """Run the processor step."""
        pass
