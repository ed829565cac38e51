"""
Command and Response Definitions

This module defines the data structures passed between the CLI shell and
the store: parsed commands going in, and per-key results coming out.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..config.settings import settings


class CommandType(Enum):
    """Enumeration of supported command types."""
    ADD = auto()
    GET = auto()
    LIST = auto()
    REMOVE = auto()
    MISSING = auto()
    UNKNOWN = auto()


# Order matters: it is the order shown to the user in usage messages
COMMAND_NAMES = {
    "add": CommandType.ADD,
    "list": CommandType.LIST,
    "get": CommandType.GET,
    "remove": CommandType.REMOVE,
}


class ResponseStatus(Enum):
    """Enumeration of response statuses."""
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    EXISTS = "EXISTS"
    COLLISION = "COLLISION"
    USAGE = "USAGE"


@dataclass
class Command:
    """
    Represents a parsed CLI command.

    Attributes:
        type: The type of command
        args: Positional arguments following the command name
        name: The command name as typed by the user (None if absent)
        raw: The original tokens joined by spaces
    """
    type: CommandType
    args: List[str] = field(default_factory=list)
    name: Optional[str] = None
    raw: str = ""

    @property
    def is_valid(self) -> bool:
        """Check if the command names a real store operation."""
        return self.type not in (CommandType.MISSING, CommandType.UNKNOWN)


@dataclass
class Response:
    """
    Represents the outcome of a store operation for one key.

    NOT_FOUND, EXISTS and COLLISION are ordinary outcomes, not faults.

    Attributes:
        status: Outcome kind
        key: The key the outcome refers to (None for usage errors)
        message: Human-readable description
        value: The value returned (for get and list)
    """
    status: ResponseStatus
    key: Optional[str] = None
    message: str = ""
    value: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status == ResponseStatus.OK

    @classmethod
    def ok(cls, key: Optional[str] = None, message: str = "",
           value: Optional[str] = None) -> "Response":
        """Create a successful response."""
        return cls(status=ResponseStatus.OK, key=key, message=message, value=value)

    @classmethod
    def stored(cls, key: str) -> "Response":
        """Create a 'stored' response for add."""
        return cls.ok(key=key, message="stored")

    @classmethod
    def removed(cls, key: str) -> "Response":
        """Create a 'removed' response for remove."""
        return cls.ok(key=key, message="removed")

    @classmethod
    def value_response(cls, key: str, value: str) -> "Response":
        """Create a response carrying a value to display."""
        return cls.ok(key=key, value=value)

    @classmethod
    def not_found(cls, key: str) -> "Response":
        prog = settings.PROG_NAME
        return cls(
            status=ResponseStatus.NOT_FOUND,
            key=key,
            message=f"Key '{key}' does not exist. Please use `{prog} add {key} [VALUE]` first.",
        )

    @classmethod
    def key_exists(cls, key: str) -> "Response":
        prog = settings.PROG_NAME
        return cls(
            status=ResponseStatus.EXISTS,
            key=key,
            message=(
                f"Key '{key}' already exists. If you'd like to replace it, "
                f"please use `{prog} remove {key}` first."
            ),
        )

    @classmethod
    def collision(cls, key: str, existing_key: str) -> "Response":
        return cls(
            status=ResponseStatus.COLLISION,
            key=key,
            message=(
                f"Key '{key}' hashes to the same file as existing key "
                f"'{existing_key}'. Please choose a different key."
            ),
        )

    @classmethod
    def usage(cls, message: str) -> "Response":
        """Create a response for missing or malformed user input."""
        return cls(status=ResponseStatus.USAGE, message=message)
