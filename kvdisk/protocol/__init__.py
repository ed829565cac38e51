"""Command and response handling for kvdisk."""

from .commands import Command, CommandType, Response, ResponseStatus
from .parser import ProtocolParser

__all__ = [
    "Command",
    "CommandType",
    "Response",
    "ResponseStatus",
    "ProtocolParser",
]
