"""
Content Store Module

Persists value blobs as files named by the hash of their key, inside a
dedicated cache directory under the storage root:

    <root>/cache/<hash>

A missing blob is a normal outcome (read returns None, delete is a no-op).
Any other I/O failure propagates to the caller.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..config.settings import settings

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Hash-addressed file storage for values.

    All blocking file calls run on a worker thread so that several reads,
    writes or deletes issued by one operation can overlap.

    Attributes:
        cache_dir: Directory holding one file per stored value
    """

    def __init__(self, store_dir: Union[str, Path]):
        """
        Initialize the content store.

        Args:
            store_dir: Storage root; values live in its cache subdirectory
        """
        self.cache_dir = Path(store_dir) / settings.CACHE_DIRNAME

    def path_for(self, digest: str) -> Path:
        """Return the path of the file holding the value for ``digest``."""
        return self.cache_dir / digest

    async def write(self, digest: str, contents: str) -> None:
        """
        Write ``contents`` to the file for ``digest``, replacing any prior value.

        The cache directory is created (recursively) if needed.
        """
        data = contents.encode(settings.ENCODING, settings.ENCODING_ERRORS)
        await asyncio.to_thread(self._write_file, digest, data)

    async def read(self, digest: str) -> Optional[str]:
        """
        Read the value stored for ``digest``.

        Returns:
            The file contents, or None if no file exists for ``digest``
        """
        return await asyncio.to_thread(self._read_file, digest)

    async def delete(self, digest: str) -> None:
        """Delete the file for ``digest``. Deleting a missing file is a no-op."""
        await asyncio.to_thread(self._delete_file, digest)

    def _write_file(self, digest: str, data: bytes) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(digest)
        path.write_bytes(data)
        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def _read_file(self, digest: str) -> Optional[str]:
        path = self.path_for(digest)
        try:
            return path.read_text(encoding=settings.ENCODING, errors=settings.ENCODING_ERRORS)
        except FileNotFoundError:
            logger.debug(f"No content file at {path}")
            return None

    def _delete_file(self, digest: str) -> None:
        path = self.path_for(digest)
        try:
            path.unlink()
        except FileNotFoundError:
            # Already absent
            return
        logger.debug(f"Deleted {path}")
