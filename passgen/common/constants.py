"""
constants.py
This module holds shared constants used across the client and server.
"""

# Wire layout
BUFFER_SIZE = 1024          # bytes reserved for the length string
MAX_PASSWORD_LENGTH = 32
MIN_PASSWORD_LENGTH = 6

# Default Ports
DEFAULT_PORT = 8080

# Type selectors
TYPE_NUMERIC = 'n'
TYPE_ALPHA = 'a'
TYPE_MIXED = 'm'
TYPE_SECURE = 's'
TYPE_UNAMBIGUOUS = 'u'
TYPE_HELP = 'h'
TYPE_QUIT = 'q'
ALLOWED_TYPES = "namsuq"

# ANSI colors
COLOR_RED = "\033[91m"
COLOR_GREEN = "\033[92m"
COLOR_YELLOW = "\033[93m"
COLOR_BLUE = "\033[94m"
COLOR_MAGENTA = "\033[95m"
COLOR_CYAN = "\033[96m"
COLOR_RESET = "\033[0m"
