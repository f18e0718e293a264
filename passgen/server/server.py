"""
server.py
Implementation of the server side of the password generator application.
"""

import socket
import struct
import sys
from passgen.common.config import get_config
from passgen.common.constants import (
    MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH,
    COLOR_GREEN, COLOR_YELLOW, COLOR_BLUE, COLOR_MAGENTA, COLOR_CYAN
)
from passgen.common.packet_structs import (
    REQUEST_SIZE,
    PasswordRequest,
    unpack_request_message,
    pack_response_message
)
from passgen.common.password import PasswordType, control_length, generate_password
from passgen.common.utils import display_address, log_color


def handle_password_request(request: PasswordRequest) -> str:
    """
    Generate the password described by a client request.
    A length outside the allowed range yields an empty password.
    """
    if not control_length(request.length, MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH):
        log_color(f"Rejected password length {request.length[:16]!r}", COLOR_YELLOW)
        return ""
    password_type = PasswordType.from_selector(request.type)
    return generate_password(password_type, int(request.length))


class PasswordServer:
    def __init__(self, config: dict[str, any]):
        self.config : dict[str, any] = config
        self.sock : socket.socket | None = None
        self.running : bool = False

    def bind(self) -> tuple[str, int]:
        """
        Create and bind the UDP socket. Returns the bound (ip, port).
        Raises OSError if the address cannot be bound.
        """
        udp_socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            udp_socket.bind((self.config['SERVER_BIND_IP'], self.config['SERVER_PORT']))
        except OSError:
            udp_socket.close()
            raise
        # Timeout lets the loop notice stop()
        udp_socket.settimeout(self.config['POLL_INTERVAL'])
        self.sock = udp_socket
        return udp_socket.getsockname()

    def start(self) -> int:
        """
        1. Bind the UDP socket (unless bind() was already called).
        2. Receive a request, generate the password, send it back, forever.
        Returns the process exit status.
        """
        try:
            ip, port = self.sock.getsockname() if self.sock else self.bind()
        except OSError as e:
            log_color(f"Bind failed: {e}", COLOR_MAGENTA)
            return 1

        log_color(f"Server listening on {display_address(ip)}:{port}...", COLOR_BLUE)
        self.running = True
        try:
            return self._serve()
        except KeyboardInterrupt:
            log_color("Server shutting down.", COLOR_YELLOW)
            return 0
        finally:
            self.running = False
            self.sock.close()

    def stop(self):
        self.running = False

    def _serve(self) -> int:
        while self.running:
            try:
                data, addr = self.sock.recvfrom(REQUEST_SIZE + 1)
            except socket.timeout:
                continue
            except OSError as e:
                log_color(f"Error receiving request (Password settings): {e}", COLOR_MAGENTA)
                return 1

            response = self.handle_datagram(data, addr)
            if response is None:
                continue

            try:
                self.sock.sendto(response, addr)
            except OSError as e:
                log_color(f"Error sending response (Password generated): {e}", COLOR_MAGENTA)
                return 1
        return 0

    def handle_datagram(self, data: bytes, addr: tuple[str, int]) -> bytes | None:
        """
        Decode one request datagram and build the response packet.
        Returns None for malformed datagrams.
        """
        log_color(f"New connection from {COLOR_YELLOW}{addr[0]}{COLOR_CYAN}:{COLOR_GREEN}{addr[1]}", COLOR_GREEN)
        try:
            request = unpack_request_message(data)
        except struct.error:
            log_color(f"Dropped malformed request from {addr[0]}:{addr[1]} ({len(data)} bytes)", COLOR_YELLOW)
            return None

        return pack_response_message(handle_password_request(request))


def main():
    config = get_config()
    server = PasswordServer(config)
    sys.exit(server.start())


if __name__ == "__main__":
    main()
