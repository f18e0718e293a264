"""
client.py
Implementation of the client side of the password generator application.
"""

import socket
import struct
import sys
from passgen.common.config import get_config
from passgen.common.constants import (
    ALLOWED_TYPES, BUFFER_SIZE, TYPE_HELP, TYPE_QUIT, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH,
    COLOR_RED, COLOR_GREEN, COLOR_YELLOW, COLOR_MAGENTA, COLOR_CYAN
)
from passgen.common.packet_structs import (
    RESPONSE_SIZE,
    PasswordRequest,
    pack_request_message,
    unpack_response_message
)
from passgen.common.password import control_length, control_type, keep_generating
from passgen.common.utils import log_color

PASSWORD_MENU = (
    f"Insert the type of password and its length (between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH}):\n"
    "  n: numeric password (only digits)\n"
    "  a: alphabetic password (only lowercase letters)\n"
    "  m: mixed password (lowercase letters and digits)\n"
    "  s: secure password (uppercase letters, lowercase letters, digits, and symbols)\n"
    "  u: unambiguous secure password (no similar-looking characters)\n"
    "  h: help menu\n"
    "  q: quit application\n"
    "? "
)

HELP_MENU = (
    "\nPassword Generator Help Menu\n"
    "Commands:\n"
    " h        : show this help menu\n"
    " n LENGTH : generate numeric password (digits only)\n"
    " a LENGTH : generate alphabetic password (lowercase letters)\n"
    " m LENGTH : generate mixed password (lowercase letters and numbers)\n"
    " s LENGTH : generate secure password (uppercase, lowercase, numbers, symbols)\n"
    " u LENGTH : generate unambiguous secure password (no similar-looking characters)\n"
    " q        : quit application\n\n"
    f" LENGTH must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters\n\n"
    " Ambiguous characters excluded in 'u' option:\n"
    " 0 O o (zero and letters O)\n"
    " 1 l I i (one and letters l, I)\n"
    " 2 Z z (two and letter Z)\n"
    " 5 S s (five and letter S)\n"
    " 8 B (eight and letter B)\n"
    "\nIf the length is absent, a default value is used: {default_length}\n"
)


def parse_user_input(line: str, default_length: int) -> PasswordRequest:
    """
    Split a menu line into PasswordRequest(type, length).

    The first non-blank character is the type; it may be followed by at most
    one token holding the length ("n 12" and "n12" are equivalent).
    Raises ValueError when the line is empty or carries extra tokens.
    """
    line = line.lstrip()
    if not line:
        raise ValueError("Invalid input. Please enter a valid type and length.")

    password_type, rest = line[0], line[1:].split()
    if not rest:
        return PasswordRequest(password_type, str(default_length))
    if len(rest) > 1:
        raise ValueError("Invalid input. Please enter a valid type and length.")
    return PasswordRequest(password_type, rest[0])


def validate_request(request: PasswordRequest):
    """
    Raises ValueError if the request has an unknown type or a bad length.
    Quit requests need a valid length too.
    """
    if not control_type(ALLOWED_TYPES, request.type):
        raise ValueError("Bad request: the type inserted is not valid.")
    # Longer input would not fit the request buffer
    if (len(request.length) >= BUFFER_SIZE
            or not control_length(request.length, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH)):
        raise ValueError("Bad request: the length for the password is not valid.")


class PasswordClient:
    def __init__(self, config: dict[str, any], input_func=input):
        self.config = config
        self.input_func = input_func
        self.server_address : tuple[str, int] | None = None
        self.running = True

    def resolve_server_address(self) -> bool:
        """
        Resolve the configured server name to an IPv4 address.
        """
        try:
            server_ip = socket.gethostbyname(self.config['SERVER_NAME'])
        except OSError as e:
            log_color(f"Error resolving host {self.config['SERVER_NAME']}: {e}", COLOR_MAGENTA)
            return False
        self.server_address = (server_ip, self.config['SERVER_PORT'])
        return True

    def start(self) -> int:
        """
        Start the client:
        1. Resolve the server address and open a UDP socket.
        2. Prompt the user for a password type and length.
        3. Send the request, wait for the password, print it.
        4. Loop until the user quits.
        Returns the process exit status.
        """
        if not self.resolve_server_address():
            return 1

        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as udp_socket:
            try:
                while self.running:
                    request = self.handle_user_input()
                    if request is None:
                        continue
                    if not keep_generating(request.type, TYPE_QUIT):
                        break
                    password = self.request_password(udp_socket, request)
                    if password is None:
                        return 1
                    log_color(f"Password generated: {password}", COLOR_GREEN, end="\n\n")
            except (KeyboardInterrupt, EOFError):
                log_color("")
        log_color("Client shutting down.", COLOR_YELLOW)
        return 0

    def handle_user_input(self) -> PasswordRequest | None:
        """
        Show the menu until the user enters something other than help.
        Returns a valid request, or None after reporting invalid input.
        """
        while True:
            log_color(PASSWORD_MENU, COLOR_YELLOW, end="")
            line = self.input_func()
            if line.lstrip()[:1].lower() == TYPE_HELP:
                log_color(HELP_MENU.format(default_length=self.config['DEFAULT_PASSWORD_LENGTH']), COLOR_CYAN)
                continue
            try:
                request = parse_user_input(line, self.config['DEFAULT_PASSWORD_LENGTH'])
            except ValueError as e:
                log_color(str(e), COLOR_RED)
                return None
            break

        try:
            validate_request(request)
        except ValueError as e:
            log_color(str(e), COLOR_RED)
            return None
        return request

    def request_password(self, udp_socket: socket.socket, request: PasswordRequest) -> str | None:
        """
        Send one request to the server and block until its response arrives.
        Returns the password, or None on a socket error.
        """
        try:
            udp_socket.sendto(pack_request_message(request.type, request.length), self.server_address)
        except OSError as e:
            log_color(f"Error sending request (Password settings): {e}", COLOR_MAGENTA)
            return None

        while True:
            try:
                data, addr = udp_socket.recvfrom(RESPONSE_SIZE + 1)
            except OSError as e:
                log_color(f"Error receiving response (Password generation response): {e}", COLOR_MAGENTA)
                return None
            try:
                return unpack_response_message(data).password
            except struct.error:
                # Ignore malformed packets
                log_color(f"Ignored malformed response from {addr[0]}:{addr[1]}", COLOR_YELLOW)


def main():
    config = get_config()
    client = PasswordClient(config)
    sys.exit(client.start())

if __name__ == "__main__":
    main()
