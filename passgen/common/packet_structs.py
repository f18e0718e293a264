"""
packet_structs.py
Helper functions to pack and unpack packet data using Python's struct module.
"""

import struct
from typing import NamedTuple

from passgen.common.constants import BUFFER_SIZE, MAX_PASSWORD_LENGTH

# '!c1024s' => Network Byte Order, 1-byte char, 1024-byte NUL padded string
REQUEST_FORMAT = f'!c{BUFFER_SIZE}s'
# '!33s' => password plus its terminator
RESPONSE_FORMAT = f'!{MAX_PASSWORD_LENGTH + 1}s'

REQUEST_SIZE = struct.calcsize(REQUEST_FORMAT)
RESPONSE_SIZE = struct.calcsize(RESPONSE_FORMAT)


class PasswordRequest(NamedTuple):
    type: str
    length: str


class PasswordResponse(NamedTuple):
    password: str


def _cut_at_nul(raw: bytes) -> str:
    return raw.split(b'\0', 1)[0].decode('ascii', errors='replace')


def pack_request_message(password_type: str, length: str) -> bytes:
    """
    Pack a request message:
    [ password type (1 byte), length as ASCII string (1024 bytes, NUL padded) ]
    """
    type_bytes = password_type.encode('ascii')
    length_bytes = length.encode('ascii')
    if len(type_bytes) != 1:
        raise ValueError(f"Password type must be a single character: {password_type!r}")
    # Keep room for the terminator
    if len(length_bytes) >= BUFFER_SIZE:
        raise ValueError(f"Length field too long ({len(length_bytes)} bytes)")
    return struct.pack(REQUEST_FORMAT, type_bytes, length_bytes)

def unpack_request_message(data: bytes) -> PasswordRequest:
    """
    Unpack a request message. Returns PasswordRequest(type, length).
    Raises struct.error if the data is malformed.
    """
    type_byte, length_bytes = struct.unpack(REQUEST_FORMAT, data)
    return PasswordRequest(type_byte.decode('ascii', errors='replace'), _cut_at_nul(length_bytes))

def pack_response_message(password: str) -> bytes:
    """
    Pack a response message:
    [ password (33 bytes, NUL padded) ]
    """
    password_bytes = password.encode('ascii')
    if len(password_bytes) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password too long ({len(password_bytes)} characters)")
    return struct.pack(RESPONSE_FORMAT, password_bytes)

def unpack_response_message(data: bytes) -> PasswordResponse:
    """
    Unpack a response message. Returns PasswordResponse(password).
    Raises struct.error if the data is malformed.
    """
    password_bytes, = struct.unpack(RESPONSE_FORMAT, data)
    return PasswordResponse(_cut_at_nul(password_bytes))
