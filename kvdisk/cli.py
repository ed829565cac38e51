#!/usr/bin/env python3
"""
kvdisk Command-Line Entry Point

Parses arguments, dispatches to the Store and prints the results.

Usage:
    kvdisk add greeting hello world     # store "hello world" under greeting
    kvdisk get greeting other           # print values, report missing keys
    kvdisk list                         # print every key
    kvdisk remove greeting other        # remove keys (missing ones ignored)
    kvdisk --dir /tmp/kv list           # custom storage root
    kvdisk --debug get greeting         # enable debug logging

Environment Variables:
    KVDISK_DIR          - Storage root (default ~/.kvdisk)
    KVDISK_DEBUG        - Enable debug mode (true/false)
    KVDISK_LOG_LEVEL    - Log level when not in debug mode
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, Sequence

from .config.settings import settings
from .engine.store import Store
from .errors import StoreError
from .protocol.commands import Command, CommandType, Response
from .protocol.parser import ProtocolParser

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=settings.PROG_NAME,
        description="kvdisk: persistent key-value store addressed by key hash",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--dir",
        type=str,
        default=settings.STORE_DIR,
        help="Storage root directory",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    parser.add_argument(
        "command",
        nargs="?",
        help='One of "add", "list", "get", "remove"',
    )

    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Keys and values for the command",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag. Logs go to stderr."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


async def run(store: Store, command: Command, parser: Optional[ProtocolParser] = None) -> List[Response]:
    """
    Pass a parsed command to the matching store operation.

    Args:
        store: A Store instance
        command: Parsed command with its arguments

    Returns:
        The responses produced by the store, or a single usage response
        if the command could not be dispatched
    """
    parser = parser or ProtocolParser()

    if not command.is_valid:
        return [parser.error_for(command)]

    if command.type == CommandType.ADD:
        return await store.add(*command.args)
    if command.type == CommandType.GET:
        return await store.get(*command.args)
    if command.type == CommandType.LIST:
        return await store.list()
    if command.type == CommandType.REMOVE:
        return await store.remove(*command.args)

    return [parser.error_for(command)]


def _emit(line: str, stream) -> None:
    """Print a line, writing undecodable input bytes back out unchanged."""
    try:
        print(line, file=stream)
    except UnicodeEncodeError:
        data = (line + "\n").encode(settings.ENCODING, settings.ENCODING_ERRORS)
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            print(data.decode(settings.ENCODING, "backslashreplace"), end="", file=stream)
            return
        stream.flush()
        buffer.write(data)
        buffer.flush()


def render(responses: List[Response], parser: ProtocolParser) -> int:
    """
    Print responses in order: values to stdout, problems to stderr.

    Returns:
        0 if every response is OK, 1 otherwise
    """
    exit_code = 0
    for response in responses:
        line = parser.format_response(response)
        if response.is_ok:
            if response.value is not None:
                _emit(line, sys.stdout)
        else:
            _emit(line, sys.stderr)
            exit_code = 1
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    parser = ProtocolParser()
    command = parser.parse_request(args.command, args.args)
    store_dir = os.path.abspath(os.path.expanduser(args.dir))
    logger.debug(f"Running {command.raw!r} against {store_dir}")

    try:
        store = Store(store_dir)
        responses = asyncio.run(run(store, command, parser))
    except (StoreError, OSError, UnicodeError) as e:
        logger.error(f"Store error: {e}")
        return 1

    return render(responses, parser)


if __name__ == "__main__":
    sys.exit(main())
