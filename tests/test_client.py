"""
Tests for the interactive UDP password client.
"""

import re
import socket

import pytest
from passgen.client import client as client_module
from passgen.client.client import PasswordClient, parse_user_input, validate_request
from passgen.common.packet_structs import PasswordRequest


def scripted_input(*lines):
    """Return an input() replacement that replays lines, then raises EOFError."""
    remaining = list(lines)

    def _input():
        if not remaining:
            raise EOFError
        return remaining.pop(0)
    return _input


def generated_passwords(output: str) -> list[str]:
    return re.findall(r"Password generated: (\S*?)\x1b\[0m", output)


class TestParseUserInput:

    @pytest.mark.parametrize("line, expected", [
        ("n 12", PasswordRequest("n", "12")),
        ("  s   20  ", PasswordRequest("s", "20")),
        ("n12", PasswordRequest("n", "12")),
        ("u", PasswordRequest("u", "8")),
        ("q", PasswordRequest("q", "8")),
        ("x 7", PasswordRequest("x", "7")),
    ])
    def test_valid_shapes(self, line, expected):
        assert parse_user_input(line, 8) == expected

    def test_default_length_comes_from_argument(self):
        assert parse_user_input("a", 10) == PasswordRequest("a", "10")

    @pytest.mark.parametrize("line", ["", "   ", "n 8 9", "s 12 extra"])
    def test_invalid_shapes(self, line):
        with pytest.raises(ValueError, match="Invalid input"):
            parse_user_input(line, 8)


class TestValidateRequest:

    def test_valid(self):
        validate_request(PasswordRequest("m", "6"))
        validate_request(PasswordRequest("u", "32"))

    def test_bad_type(self):
        with pytest.raises(ValueError, match="type inserted is not valid"):
            validate_request(PasswordRequest("N", "8"))

    @pytest.mark.parametrize("length", ["5", "33", "abc"])
    def test_bad_length(self, length):
        with pytest.raises(ValueError, match="length for the password is not valid"):
            validate_request(PasswordRequest("n", length))

    def test_quit_needs_valid_length(self):
        validate_request(PasswordRequest("q", "8"))
        with pytest.raises(ValueError, match="length for the password is not valid"):
            validate_request(PasswordRequest("q", "100"))

    def test_length_longer_than_buffer(self):
        """Test leading zeros that would overflow the request buffer are rejected."""
        with pytest.raises(ValueError, match="length for the password is not valid"):
            validate_request(PasswordRequest("n", "0" * 1100 + "8"))
        validate_request(PasswordRequest("n", "0" * 1000 + "8"))


class TestHandleUserInput:

    def test_help_then_request(self, config, capsys):
        client = PasswordClient(config, input_func=scripted_input("h", "s 10"))
        assert client.handle_user_input() == PasswordRequest("s", "10")
        assert "Password Generator Help Menu" in capsys.readouterr().out

    def test_help_with_extra_tokens(self, config, capsys):
        """Test help is shown whatever follows the selector."""
        client = PasswordClient(config, input_func=scripted_input("H foo bar", "n"))
        assert client.handle_user_input() == PasswordRequest("n", "8")
        output = capsys.readouterr().out
        assert "Password Generator Help Menu" in output
        assert "Invalid input" not in output

    def test_huge_length_reports_bad_request(self, config, capsys):
        client = PasswordClient(config, input_func=scripted_input("n " + "0" * 5000 + "8"))
        assert client.handle_user_input() is None
        assert "Bad request: the length for the password is not valid." in capsys.readouterr().out

    def test_invalid_returns_none(self, config, capsys):
        client = PasswordClient(config, input_func=scripted_input("z 10"))
        assert client.handle_user_input() is None
        assert "Bad request: the type inserted is not valid." in capsys.readouterr().out


class TestSession:

    def test_full_session(self, running_server, config, capsys):
        client = PasswordClient(config, input_func=scripted_input(
            "n 10", "z 9", "a 4", "u", "s 32", "q",
        ))
        assert client.start() == 0

        output = capsys.readouterr().out
        passwords = generated_passwords(output)
        assert [len(p) for p in passwords] == [10, 8, 32]
        assert passwords[0].isdigit()
        assert "Bad request: the type inserted is not valid." in output
        assert "Bad request: the length for the password is not valid." in output

    def test_end_of_input_quits(self, running_server, config):
        client = PasswordClient(config, input_func=scripted_input("m 12"))
        assert client.start() == 0

    def test_unresolvable_host(self, config):
        config["SERVER_NAME"] = "does-not-exist.invalid"
        client = PasswordClient(config, input_func=scripted_input())
        assert client.start() == 1

    def test_overlong_length_reprompts(self, running_server, config, capsys):
        client = PasswordClient(config, input_func=scripted_input("n " + "0" * 1100 + "8", "n 9", "q"))
        assert client.start() == 0

        output = capsys.readouterr().out
        assert "Bad request: the length for the password is not valid." in output
        assert [len(p) for p in generated_passwords(output)] == [9]


class FailingSocket:
    """Stand-in UDP socket whose send or receive raises OSError."""

    def __init__(self, fail_on: str):
        self.fail_on = fail_on

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def sendto(self, data, address):
        if self.fail_on == "send":
            raise OSError("network unreachable")
        return len(data)

    def recvfrom(self, size):
        raise OSError("connection refused")


class TestSocketErrors:

    @pytest.mark.parametrize("fail_on, message", [
        ("send", "Error sending request"),
        ("recv", "Error receiving response"),
    ])
    def test_socket_error_exits_with_failure(self, monkeypatch, config, capsys, fail_on, message):
        monkeypatch.setattr(client_module.socket, "socket", lambda *args: FailingSocket(fail_on))
        client = PasswordClient(config, input_func=scripted_input("n 8", "q"))
        assert client.start() == 1
        assert message in capsys.readouterr().out

    def test_receive_timeout_returns_none(self, config):
        """Test a request to a port nobody listens on gives up on timeout."""
        client = PasswordClient(config, input_func=scripted_input("n 8"))
        assert client.resolve_server_address()
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as udp_socket:
            udp_socket.settimeout(0.2)
            assert client.request_password(udp_socket, PasswordRequest("n", "8")) is None
