"""
Store Facade Module

Implements the four store operations (add, get, list, remove) on top of
the content store and the key index.

Layout under the storage root:
    index           JSON object of key -> md5(key)
    cache/<md5>     one file per value

The facade derives hashes from keys, refuses to overwrite existing keys,
and sequences the content and index writes. It never prints; every
operation returns a list of Response objects for the caller to render.
"""

import asyncio
import hashlib
import logging
import os
from pathlib import Path
from typing import List, Union

from .content_store import ContentStore
from .key_index import KeyIndex
from ..config.settings import settings
from ..protocol.commands import Response

logger = logging.getLogger(__name__)


def hash_key(key: str) -> str:
    """Return the lowercase hex MD5 digest used as the filename for ``key``."""
    return hashlib.md5(key.encode(settings.ENCODING, settings.ENCODING_ERRORS)).hexdigest()


async def _gather_all(*aws) -> None:
    """
    Run awaitables concurrently and wait for every one of them to finish.

    The first exception is re-raised only after the rest have settled.
    Completed writes are not rolled back.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result


def _usage(command: str, arguments: str, noun: str) -> Response:
    return Response.usage(
        f"You must provide {noun} to {command}: `{settings.PROG_NAME} {command} {arguments}`."
    )


class Store:
    """
    Persistent key-value store addressed by key hash.

    Each Store owns one ContentStore and one KeyIndex rooted at the same
    directory. The index is loaded at most once per Store.

    Operations are not atomic with respect to each other or to other
    processes: the content write and the index flush of an add (or the
    deletions and flush of a remove) run concurrently, and a failure in
    one does not roll back the other. A key whose content file is missing
    simply reads as not found.

    Usage:
        store = Store("/var/lib/kvdisk")
        await store.add("greeting", "hello", "world")
        responses = await store.get("greeting")   # value "hello world"

    Attributes:
        store_dir: Absolute storage root
    """

    def __init__(self, store_dir: Union[str, Path, None]):
        """
        Initialize the store.

        Args:
            store_dir: Absolute path of the storage root

        Raises:
            ValueError: If store_dir is empty or not absolute
        """
        if not store_dir or not os.path.isabs(store_dir):
            raise ValueError("You must provide store_dir as an absolute path.")

        self.store_dir = Path(store_dir)
        self._content = ContentStore(self.store_dir)
        self._index = KeyIndex(self.store_dir)

    @property
    def content(self) -> ContentStore:
        """The ContentStore holding this store's value files."""
        return self._content

    @property
    def index(self) -> KeyIndex:
        """The KeyIndex recording this store's keys."""
        return self._index

    async def add(self, key: str = "", *values: str) -> List[Response]:
        """
        Add a key and value to the store.

        Args:
            key: A key not already in the store
            *values: Strings joined with single spaces to form the value

        Returns:
            [stored] on success, or a single usage / key-exists / collision
            response when nothing was written
        """
        if not key or not values:
            return [_usage("add", "[KEY] [VALUE]", "a key and value")]

        contents = settings.VALUE_SEPARATOR.join(values)
        try:
            digest = hash_key(key)
            contents.encode(settings.ENCODING, settings.ENCODING_ERRORS)
        except UnicodeEncodeError:
            # Nothing may be written unless both the key and value can be stored
            return [Response.usage("Keys and values must be valid text.")]

        index = await self._index.get()
        if key in index:
            logger.info(f"Refusing to add existing key {key!r}")
            return [Response.key_exists(key)]

        for existing_key, existing_digest in index.items():
            if existing_digest == digest:
                logger.warning(f"Hash collision between {key!r} and {existing_key!r}")
                return [Response.collision(key, existing_key)]

        await _gather_all(
            self._content.write(digest, contents),
            self._add_to_index(key, digest),
        )
        logger.debug(f"Added {key!r} as {digest}")
        return [Response.stored(key)]

    async def get(self, *keys: str) -> List[Response]:
        """
        Fetch the values of one or more keys.

        Content files are read directly by hash; the index is not consulted.

        Returns:
            One response per key: values for found keys first, then
            not-found responses, each group in request order
        """
        if not keys:
            return [_usage("get", "[KEY]", "a key")]

        contents = await asyncio.gather(
            *(self._content.read(hash_key(key)) for key in keys)
        )

        found = []
        missing = []
        for key, value in zip(keys, contents):
            if value is None:
                missing.append(Response.not_found(key))
            else:
                found.append(Response.value_response(key, value))
        return found + missing

    async def list(self) -> List[Response]:
        """List every key in the index, in index order."""
        index = await self._index.get()
        return [Response.value_response(key, key) for key in index]

    async def remove(self, *keys: str) -> List[Response]:
        """
        Remove any number of keys and their values. Unknown keys are ignored.

        Content deletions are issued for every key whether or not it is
        indexed; the index is updated in memory and flushed once. The index
        is loaded before any deletion starts, so a corrupted index leaves
        every content file in place.
        """
        if not keys:
            return [_usage("remove", "[KEY]", "keys")]

        digests = [hash_key(key) for key in keys]
        await self._index.get()

        deletions = [self._content.delete(digest) for digest in digests]
        for key in keys:
            await self._index.remove(key)

        await _gather_all(*deletions, self._index.flush())
        logger.debug(f"Removed {len(keys)} key(s)")
        return [Response.removed(key) for key in keys]

    async def _add_to_index(self, key: str, digest: str) -> None:
        await self._index.add(key, digest)
        await self._index.flush()
