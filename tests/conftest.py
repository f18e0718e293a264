"""
Pytest Configuration and Fixtures

This module provides shared fixtures for the client and server tests.
"""

import socket
import threading
from contextlib import closing

import pytest

from passgen.server.server import PasswordServer


def find_free_port() -> int:
    """Find an available UDP port for testing."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_DGRAM)) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture
def config() -> dict:
    """Configuration equivalent to get_config() defaults, on a free port."""
    return {
        "SERVER_NAME": "127.0.0.1",
        "SERVER_BIND_IP": "127.0.0.1",
        "SERVER_PORT": find_free_port(),
        "DEFAULT_PASSWORD_LENGTH": 8,
        "POLL_INTERVAL": 0.05,
    }


@pytest.fixture
def running_server(config):
    """Start a PasswordServer in a background thread; yields (server, address)."""
    server = PasswordServer(config)
    address = server.bind()
    result = {}
    thread = threading.Thread(target=lambda: result.setdefault("status", server.start()), daemon=True)
    thread.start()

    yield server, address

    server.stop()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert result["status"] == 0


@pytest.fixture
def udp_client():
    """A UDP socket with a receive timeout, closed after the test."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_DGRAM)) as s:
        s.settimeout(2.0)
        yield s
