"""
Error handling utilities for contract calls.

This module decides which contract-call failures are recoverable and
which must abort processing, and provides the retry classification used
by the ledger client.
"""

from enum import Enum
from typing import Optional, Dict, Any
import logging

from web3.exceptions import (
    ABIFunctionNotFound,
    BadFunctionCallOutput,
    ContractCustomError,
    ContractLogicError,
    ContractPanicError,
)

logger = logging.getLogger(__name__)

# web3 reports calls against accounts without code (or methods that return
# nothing) with these BadFunctionCallOutput messages
MISSING_CODE_MARKERS = (
    "is contract deployed correctly",
    "return data: b''",
    "return data: 0x,",
)


# Revert payloads web3 reports for a revert without reason or custom error
EMPTY_REVERT_DATA = (None, "", "0x", b"")

BARE_REVERT_MESSAGE = "execution reverted"


class ContractCallError(Exception):
    """Raised when a contract call cannot be completed."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class ErrorClass(Enum):
    """Outcome of classifying a failed token contract call."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


def is_bare_revert(error: ContractLogicError) -> bool:
    """
    Check whether a revert carries neither a reason nor custom error data.

    Panics, custom errors and reason strings prove the method exists and
    ran, so only a bare revert counts.
    """
    if isinstance(error, (ContractPanicError, ContractCustomError)):
        return False
    if error.data not in EMPTY_REVERT_DATA:
        return False
    return str(error.message).strip() == BARE_REVERT_MESSAGE


def is_method_missing(error: Exception) -> bool:
    """
    Check whether an error means the target does not expose the called method.

    This is the chain-level signal of a destroyed contract or one that never
    implemented the expected interface.
    """
    if isinstance(error, ABIFunctionNotFound):
        return True
    if isinstance(error, ContractLogicError):
        return is_bare_revert(error)
    if isinstance(error, BadFunctionCallOutput):
        message = str(error)
        return any(marker in message for marker in MISSING_CODE_MARKERS)
    return False


def classify_contract_error(error: Exception) -> ErrorClass:
    """
    Classify a token contract call failure.

    Args:
        error: Exception raised by the ledger client

    Returns:
        ErrorClass.RECOVERABLE if the value should be treated as absent/zero,
        ErrorClass.FATAL otherwise
    """
    if is_method_missing(error):
        return ErrorClass.RECOVERABLE
    return ErrorClass.FATAL


# Message keywords per retry category, checked in order
_CATEGORY_KEYWORDS = (
    ('rate_limit', ('rate limit', 'too many requests', '429')),
    ('network', ('connection', 'timeout', 'timed out', 'network', 'dns')),
    ('contract', ('revert', 'out of gas')),
    ('validation', ('invalid', 'bad request', '400')),
)

RETRYABLE_CATEGORIES = frozenset({'network', 'rate_limit', 'unknown'})

MAX_RETRY_DELAY = 60.0


class ErrorHandler:
    """
    Retry policy for ledger RPC requests.

    Errors are sorted into categories: contract, rate_limit, network,
    validation or unknown. Only network, rate_limit and unknown failures
    are retried; contract answers are deterministic.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """Category name for ``error``."""
        if isinstance(error, (ABIFunctionNotFound, BadFunctionCallOutput, ContractLogicError)):
            return 'contract'
        if isinstance(error, (ConnectionError, TimeoutError)):
            return 'network'

        message = str(error).lower()
        for category, keywords in _CATEGORY_KEYWORDS:
            if any(keyword in message for keyword in keywords):
                return category
        return 'unknown'

    def should_retry(self, error: Exception, attempt: int, max_retries: int) -> bool:
        """
        Args:
            error: Failure of the current attempt
            attempt: Zero-based attempt number
            max_retries: Total attempts allowed
        """
        if attempt + 1 >= max_retries:
            return False
        return self.classify_error(error) in RETRYABLE_CATEGORIES

    def get_retry_delay(self, error: Exception, attempt: int, base_delay: float = 1.0) -> float:
        """Exponential backoff, doubled for rate limits and capped at one minute before scaling."""
        delay = min(base_delay * 2 ** attempt, MAX_RETRY_DELAY)
        multiplier = {'rate_limit': 2, 'network': 1}.get(self.classify_error(error), 1.5)
        return delay * multiplier

    def log_error(self, error: Exception, context: Dict[str, Any]):
        """Log a failed request at a level matching its category."""
        category = self.classify_error(error)
        details = ", ".join(f"{key}={value}" for key, value in context.items())
        message = f"RPC {category} error ({type(error).__name__}: {error}) [{details}]"

        if category == 'contract':
            self.logger.debug(message)
        elif category == 'rate_limit':
            self.logger.info(message)
        else:
            self.logger.warning(message)
