"""
Base classes for contract wrappers.

Wrappers bind a contract address to a ledger client and expose typed
methods; they never talk to a transport directly.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from eth_utils import is_address, to_checksum_address

from ..fetchers.base import BlockIdentifier, LedgerClient
from .errors import ContractCallError

logger = logging.getLogger(__name__)


def load_abi(path: Union[str, Path]) -> List[dict]:
    """
    Load a contract ABI from a JSON file.

    Raises:
        ContractCallError: If the file is missing or not a JSON ABI list
    """
    try:
        with open(path, "r") as f:
            abi = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ContractCallError(f"Failed to load contract ABI {path}: {e}")

    if not isinstance(abi, list):
        raise ContractCallError(f"Contract ABI {path} must be a JSON list")
    return abi


class ContractBase:
    """
    Base class for contract wrappers.

    Provides address validation and ABI-driven queries through the
    ledger client.
    """

    def __init__(self, client: LedgerClient, address: str, abi: Optional[List[dict]] = None):
        if not is_address(address):
            raise ContractCallError(f"Invalid contract address: {address}", address)
        self.client = client
        self.address = to_checksum_address(address)
        self.abi = abi
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def _query(self, method: str, *args: Any, block: Optional[BlockIdentifier] = None) -> Any:
        if self.abi is None:
            raise ContractCallError(f"{self.__class__.__name__} has no ABI for {method}", self.address)
        return await self.client.query(self.address, self.abi, method, args, block)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.address})"
