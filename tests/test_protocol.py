"""
Tests for Commands, Responses and the ProtocolParser

These tests verify:
- parse_request(): Command name and argument parsing
- error_for(): Messages for missing and unknown commands
- format_response(): Rendering responses for display
- Response constructors and statuses

Run with: python -m pytest tests/test_protocol.py -v
"""

import pytest

from kvdisk.protocol.commands import Command, CommandType, Response, ResponseStatus
from kvdisk.protocol.parser import ProtocolParser


class TestParseRequest:
    """Test parsing of command names and arguments."""

    @pytest.mark.parametrize("name,expected", [
        ("add", CommandType.ADD),
        ("get", CommandType.GET),
        ("list", CommandType.LIST),
        ("remove", CommandType.REMOVE),
    ])
    def test_valid_commands(self, parser: ProtocolParser, name, expected):
        """Test each command name maps to its type."""
        cmd = parser.parse_request(name, [])
        assert cmd.type == expected
        assert cmd.is_valid

    def test_case_insensitive(self, parser: ProtocolParser):
        """Test command names ignore case."""
        assert parser.parse_request("ADD", ["k", "v"]).type == CommandType.ADD
        assert parser.parse_request("Remove", ["k"]).type == CommandType.REMOVE

    def test_no_command(self, parser: ProtocolParser):
        """Test a missing command name."""
        cmd = parser.parse_request(None, [])
        assert cmd.type == CommandType.MISSING
        assert cmd.args == []
        assert not cmd.is_valid

    def test_empty_command(self, parser: ProtocolParser):
        """Test an empty command name counts as missing."""
        assert parser.parse_request("", []).type == CommandType.MISSING

    def test_unknown_command(self, parser: ProtocolParser):
        """Test an unrecognised command name."""
        cmd = parser.parse_request("someTest", ["a"])
        assert cmd.type == CommandType.UNKNOWN
        assert cmd.name == "someTest"
        assert not cmd.is_valid

    def test_args_passed_through(self, parser: ProtocolParser):
        """Test arguments are kept in order and untouched."""
        cmd = parser.parse_request("add", ["key", "two words", "あ"])
        assert cmd.args == ["key", "two words", "あ"]
        assert cmd.raw == "add key two words あ"

    def test_args_copied(self, parser: ProtocolParser):
        """Test the command does not alias the caller's list."""
        args = ["a"]
        cmd = parser.parse_request("get", args)
        args.append("b")
        assert cmd.args == ["a"]


class TestErrorFor:
    """Test usage messages for commands that can't be dispatched."""

    def test_missing_command_message(self, parser: ProtocolParser):
        """Test the message lists the valid commands."""
        response = parser.error_for(Command(type=CommandType.MISSING))
        assert response.status == ResponseStatus.USAGE
        assert response.message == (
            'You must specify a command. Valid options are: "add", "list", "get", "remove".'
        )

    def test_unknown_command_message(self, parser: ProtocolParser):
        """Test the message names the bad command."""
        response = parser.error_for(parser.parse_request("someTest"))
        assert response.message == (
            '"someTest" is not a valid command. Please use one of "add", "list", "get", "remove".'
        )


class TestFormatResponse:
    """Test format_response()."""

    def test_value(self, parser: ProtocolParser):
        """Test values are printed bare."""
        assert parser.format_response(Response.value_response("k", "hello world")) == "hello world"

    def test_empty_value(self, parser: ProtocolParser):
        """Test an empty value is still a value."""
        assert parser.format_response(Response.value_response("k", "")) == ""

    def test_silent_ok(self, parser: ProtocolParser):
        """Test add/remove confirmations print nothing."""
        assert parser.format_response(Response.stored("k")) == ""
        assert parser.format_response(Response.removed("k")) == ""

    def test_not_found(self, parser: ProtocolParser):
        """Test absence renders its message."""
        line = parser.format_response(Response.not_found("k"))
        assert line == "Key 'k' does not exist. Please use `kvdisk add k [VALUE]` first."

    def test_usage(self, parser: ProtocolParser):
        """Test usage errors render their message."""
        assert parser.format_response(Response.usage("oops")) == "oops"


class TestResponse:
    """Test Response constructors."""

    def test_ok_statuses(self):
        """Test the success constructors."""
        for response in (
            Response.ok(),
            Response.stored("k"),
            Response.removed("k"),
            Response.value_response("k", "v"),
        ):
            assert response.status == ResponseStatus.OK
            assert response.is_ok

    def test_failure_statuses(self):
        """Test each non-OK constructor has its own status."""
        assert Response.not_found("k").status == ResponseStatus.NOT_FOUND
        assert Response.key_exists("k").status == ResponseStatus.EXISTS
        assert Response.collision("k", "o").status == ResponseStatus.COLLISION
        assert Response.usage("m").status == ResponseStatus.USAGE
        assert not Response.not_found("k").is_ok

    def test_keys_recorded(self):
        """Test per-key responses remember their key."""
        assert Response.not_found("k").key == "k"
        assert Response.value_response("k", "v").key == "k"
        assert Response.usage("m").key is None
