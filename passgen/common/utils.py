"""
utils.py
General helper functions used by both client and server.
"""

import socket

from passgen.common.constants import COLOR_RED, COLOR_RESET

def get_local_ip() -> str:
    """
    Returns the local IP address for the default route.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            # This IP/port doesn't need to be reachable; we just want to force the OS to give us a default IP
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        log_color("Failed to get local IP address. Using fallback '127.0.0.1'.", COLOR_RED)
        return "127.0.0.1"

def display_address(bind_ip: str) -> str:
    """
    Address to show in logs for a bound socket: the wildcard is replaced
    by the address of the default route.
    """
    if bind_ip in ("", "0.0.0.0"):
        return get_local_ip()
    return bind_ip

def log_color(msg: str, color_code: str = COLOR_RESET, end: str = "\n"):
    """
    Prints a message with ANSI color codes.
    Example color codes:
      - "\033[92m" (Green)
      - "\033[93m" (Yellow)
      - "\033[91m" (Red)
      - "\033[0m"  (Reset)
    """
    print(f"{color_code}{msg}{COLOR_RESET}", end=end, flush=True)
