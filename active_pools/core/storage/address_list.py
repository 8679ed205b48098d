"""
Plain text pool address lists, one address per line.

Used to reuse an active pool set computed by an earlier run instead of
scanning the chain again.
"""

import logging
from pathlib import Path
from typing import Iterable, Set, Union

from eth_utils import is_address, to_checksum_address

from .base import DataError

logger = logging.getLogger(__name__)


def load_pool_addresses(path: Union[str, Path]) -> Set[str]:
    """
    Load pool addresses from a text file.

    Blank lines are ignored; every other line must be an address.

    Raises:
        DataError: If the file cannot be read or a line is not an address
    """
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise DataError(f"Failed to open address file {path}: {e}") from e

    addresses = set()
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        if not is_address(line):
            raise DataError(f"Invalid address on line {line_number} of {path}: {line}")
        addresses.add(to_checksum_address(line))

    logger.info(f"Loaded {len(addresses)} pool addresses from {path}")
    return addresses


def save_pool_addresses(path: Union[str, Path], addresses: Iterable[str]) -> Path:
    """Write pool addresses sorted, one per line."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            "".join(f"{address}\n" for address in sorted(addresses)), encoding="utf-8"
        )
    except OSError as e:
        raise DataError(f"Failed to write address file {path}: {e}") from e

    logger.info(f"Saved pool addresses to {path}")
    return path
