"""Storage engine for kvdisk."""

from .content_store import ContentStore
from .key_index import KeyIndex
from .store import Store, hash_key

__all__ = ["ContentStore", "KeyIndex", "Store", "hash_key"]
