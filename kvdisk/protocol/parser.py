"""
Command Parser Module

Turns the command-line tokens after the program's own options into a
Command, and turns a Response back into the line shown to the user.
"""

from typing import Optional, Sequence

from .commands import COMMAND_NAMES, Command, CommandType, Response


VALID_COMMANDS = '", "'.join(COMMAND_NAMES)


class ProtocolParser:
    """
    Parser for kvdisk commands.

    Commands:
        add <key> <value...>   -> (silent) | key exists | collision
        get <key...>           -> <value> | key does not exist
        list                   -> <key> per line
        remove <key...>        -> (silent)

    Command names are case-insensitive. Argument validation (missing keys,
    missing values) belongs to the store, which reports it as a usage
    Response, so the parser passes arguments through untouched.
    """

    def parse_request(self, name: Optional[str], args: Sequence[str] = ()) -> Command:
        """
        Parse a command name and its arguments into a Command object.

        Args:
            name: The command name, or None if the user gave none
            args: Remaining positional arguments

        Returns:
            Command object. MISSING if no name was given, UNKNOWN if the
            name is not a known command.

        Examples:
            >>> parser = ProtocolParser()
            >>> cmd = parser.parse_request("add", ["mykey", "my", "value"])
            >>> cmd.type == CommandType.ADD
            True
            >>> cmd.args
            ['mykey', 'my', 'value']
        """
        args = list(args)
        raw = " ".join([name or ""] + args).strip()

        if not name:
            return Command(type=CommandType.MISSING, args=args, raw=raw)

        command_type = COMMAND_NAMES.get(name.lower(), CommandType.UNKNOWN)
        return Command(type=command_type, args=args, name=name, raw=raw)

    def error_for(self, command: Command) -> Response:
        """Build the usage Response for a command that cannot be dispatched."""
        if command.type == CommandType.MISSING:
            return Response.usage(
                f'You must specify a command. Valid options are: "{VALID_COMMANDS}".'
            )
        return Response.usage(
            f'"{command.name}" is not a valid command. Please use one of "{VALID_COMMANDS}".'
        )

    def format_response(self, response: Response) -> str:
        """
        Format a Response object into the line shown to the user.

        Returns:
            The value for OK responses that carry one, an empty string for
            silent OK responses (add, remove), and the message otherwise.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_response(Response.value_response("k", "hello"))
            'hello'
            >>> parser.format_response(Response.stored("k"))
            ''
        """
        if response.is_ok:
            return response.value if response.value is not None else ""
        return response.message
