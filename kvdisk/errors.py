"""
Engine error types.

Ordinary outcomes (missing key, key conflict, bad usage) are reported as
Response values. Only faults that leave the engine unable to continue are
raised, and plain OSErrors from file I/O propagate unwrapped.
"""

from pathlib import Path
from typing import Optional


class StoreError(Exception):
    """Base class for unrecoverable store faults."""


class IndexCorruptedError(StoreError):
    """The index file exists but does not hold a JSON object of strings."""

    def __init__(self, path: Path, reason: str, cause: Optional[Exception] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"Index file {path} is corrupted: {reason}")
