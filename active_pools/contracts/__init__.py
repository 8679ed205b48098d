"""
Contract wrappers for factory, pair and token reads.

This package binds contract addresses to a ledger client and owns the
rule that separates recoverable from fatal contract-call failures.
"""

from .errors import (
    ContractCallError,
    ErrorClass,
    ErrorHandler,
    classify_contract_error,
    is_method_missing,
)
from .base import ContractBase, load_abi
from .erc20 import Erc20Contract
from .factory import FactoryContract
from .pair import PairContract

__all__ = [
    'ContractCallError',
    'ErrorClass',
    'ErrorHandler',
    'classify_contract_error',
    'is_method_missing',
    'ContractBase',
    'load_abi',
    'Erc20Contract',
    'FactoryContract',
    'PairContract',
]
