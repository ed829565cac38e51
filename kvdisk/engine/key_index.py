"""
Key Index Module

Tracks which keys exist and the hash of each, as a single JSON object
stored at ``<root>/index``:

    {"key": "<md5 hex of key>", ...}

The mapping is loaded lazily on first access and then mutated in memory.
Nothing reaches disk until flush() is called.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..config.settings import settings
from ..errors import IndexCorruptedError

logger = logging.getLogger(__name__)


class KeyIndex:
    """
    Lazily loaded key -> hash mapping with explicit flush-to-disk.

    Each instance loads the index file at most once. Mutations only touch
    the in-memory mapping; callers pair them with a flush().

    Attributes:
        store_dir: Storage root directory
        path: Location of the index file
    """

    def __init__(self, store_dir: Union[str, Path]):
        self.store_dir = Path(store_dir)
        self.path = self.store_dir / settings.INDEX_FILENAME

        self._index: Optional[Dict[str, str]] = None
        self._load_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        """Whether the mapping has been read into memory yet."""
        return self._index is not None

    async def get(self) -> Dict[str, str]:
        """
        Return the in-memory mapping, loading it from disk on first use.

        A missing index file yields an empty mapping; the empty mapping is
        not written until the next flush().

        Raises:
            IndexCorruptedError: If the index file is not a JSON object of strings
        """
        if self._index is None:
            async with self._load_lock:
                if self._index is None:
                    self._index = await asyncio.to_thread(self._load)
        return self._index

    async def add(self, key: str, digest: str) -> None:
        """Map ``key`` to ``digest`` in memory."""
        index = await self.get()
        index[key] = digest

    async def remove(self, key: str) -> None:
        """Drop ``key`` from the in-memory mapping. Unknown keys are ignored."""
        index = await self.get()
        index.pop(key, None)

    async def flush(self) -> None:
        """Write the current mapping to the index file, replacing its contents."""
        index = await self.get()
        # Serialize now so later in-memory changes don't leak into this write
        data = json.dumps(index, ensure_ascii=False, separators=(",", ":"))
        await asyncio.to_thread(self._write, data)
        logger.debug(f"Flushed {len(index)} keys to {self.path}")

    def _load(self) -> Dict[str, str]:
        self.store_dir.mkdir(parents=True, exist_ok=True)
        try:
            data = self.path.read_text(encoding=settings.ENCODING, errors=settings.ENCODING_ERRORS)
        except FileNotFoundError:
            logger.debug(f"No index at {self.path}, starting empty")
            return {}

        try:
            index = json.loads(data)
        except json.JSONDecodeError as exc:
            raise IndexCorruptedError(self.path, "invalid JSON", exc) from exc

        if not isinstance(index, dict):
            raise IndexCorruptedError(self.path, "expected a JSON object")
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in index.items()):
            raise IndexCorruptedError(self.path, "keys and hashes must be strings")

        logger.debug(f"Loaded {len(index)} keys from {self.path}")
        return index

    def _write(self, data: str) -> None:
        self.path.write_text(data, encoding=settings.ENCODING, errors=settings.ENCODING_ERRORS)
