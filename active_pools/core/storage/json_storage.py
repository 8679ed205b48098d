"""
JSON file store for pool snapshots.

A snapshot is one JSON array of DexPoolRecord dictionaries. Files ending
in .gz are gzip compressed.
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Sequence, Union

import ujson

from ..models import DexPoolRecord
from .base import StorageBase, DataError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _open_text(path: Path, mode: str, compressed: bool) -> IO[str]:
    if compressed:
        return gzip.open(path, f"{mode}t", encoding='utf-8')
    return open(path, mode, encoding='utf-8')


class JsonStorage(StorageBase):
    """
    Snapshot files under a base directory.

    Writes go to a sibling ``.tmp`` file that replaces the target only once
    fully written.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Args:
            config: Options
                - base_path: Directory for relative names (default ./output)
                - compress: Add .gz to names and gzip the content (default False)
                - pretty: Indent output (default False)
        """
        super().__init__(config)
        self.base_path = Path(config.get('base_path', './output'))
        self.compress = bool(config.get('compress', False))
        self.pretty = bool(config.get('pretty', False))

    async def connect(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.is_connected = True
        logger.debug(f"Snapshot directory ready: {self.base_path}")

    async def disconnect(self) -> None:
        self.is_connected = False

    def resolve(self, name: PathLike) -> Path:
        """Path a dataset name maps to; absolute names bypass base_path."""
        name = str(name)
        if not name.endswith(('.json', '.json.gz')):
            name += '.json'
        if self.compress and not name.endswith('.gz'):
            name += '.gz'
        return self.base_path / name

    def save(self, name: PathLike, data: Any) -> Path:
        """
        Serialize ``data`` to the dataset ``name``.

        Raises:
            DataError: If the data is not serializable or the file cannot be written
        """
        target = self.resolve(name)
        partial = target.with_name(target.name + '.tmp')

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with _open_text(partial, 'w', target.suffix == '.gz') as f:
                ujson.dump(data, f, indent=2 if self.pretty else 0, ensure_ascii=False)
            partial.replace(target)
        except (OSError, TypeError, ValueError, OverflowError) as e:
            partial.unlink(missing_ok=True)
            logger.error(f"Could not write {target}: {e}")
            raise DataError(f"JSON save failed for {target}: {e}") from e

        logger.info(f"Wrote {target}")
        return target

    def load(self, name: PathLike) -> Optional[Any]:
        """
        Parse the dataset ``name``; None if it does not exist.

        Raises:
            DataError: If the file is unreadable or not valid JSON
        """
        source = self.resolve(name)
        if not source.exists():
            return None

        try:
            with _open_text(source, 'r', source.suffix == '.gz') as f:
                data = ujson.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read {source}: {e}")
            raise DataError(f"JSON load failed for {source}: {e}") from e

        logger.debug(f"Read {source}")
        return data

    def save_pool_records(self, name: PathLike, records: Sequence[DexPoolRecord]) -> Path:
        return self.save(name, [record.to_dict() for record in records])

    def load_pool_records(self, name: PathLike) -> Optional[List[DexPoolRecord]]:
        data = self.load(name)
        if data is None:
            return None
        if not isinstance(data, list):
            raise DataError(f"Expected a JSON array of pool records in {name}")
        try:
            return [DexPoolRecord.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise DataError(f"Invalid pool record in {name}: {e}") from e
