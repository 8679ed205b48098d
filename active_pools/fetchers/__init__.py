"""
Remote ledger access.

KISS: one abstract client interface and one web3.py implementation.
"""

from .base import BlockIdentifier, LedgerClient, LogEntry
from .web3_fetcher import Web3LedgerClient

__all__ = [
    'BlockIdentifier',
    'LedgerClient',
    'LogEntry',
    'Web3LedgerClient',
]
