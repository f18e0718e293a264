"""
password.py
Password generation and the input checks shared by client and server.
"""

import random
import string
from enum import Enum

from passgen.common.constants import (
    TYPE_NUMERIC, TYPE_ALPHA, TYPE_MIXED, TYPE_SECURE, TYPE_UNAMBIGUOUS
)

SYMBOLS = "!@#$%^&*()"

NUMERIC_CHARSET = string.digits
ALPHA_CHARSET = string.ascii_lowercase
SECURE_CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits + SYMBOLS
# No 0 O o, 1 l I i, 2 Z z, 5 S s, 8 B
UNAMBIGUOUS_CHARSET = "abcdefghjkmnpqrtuvwxyACDEFGHJKLMNPQRTUVWXY34679" + SYMBOLS

_SYSTEM_RNG = random.SystemRandom()


class PasswordType(Enum):
    NUMERIC = TYPE_NUMERIC
    ALPHA = TYPE_ALPHA
    MIXED = TYPE_MIXED
    SECURE = TYPE_SECURE
    UNAMBIGUOUS = TYPE_UNAMBIGUOUS

    @classmethod
    def from_selector(cls, selector: str) -> "PasswordType":
        """
        Map a one-character selector to a PasswordType (case-insensitive).
        Unknown selectors fall back to NUMERIC.
        """
        try:
            return cls(selector.lower())
        except ValueError:
            return cls.NUMERIC


def _generate_from(charset: str, length: int, rng) -> str:
    return "".join(rng.choice(charset) for _ in range(length))


def _generate_mixed(length: int, rng) -> str:
    # Coin flip per character between a letter and a digit
    return "".join(
        rng.choice(ALPHA_CHARSET) if rng.random() < 0.5 else rng.choice(NUMERIC_CHARSET)
        for _ in range(length)
    )


def generate_password(password_type: PasswordType, length: int, rng=None) -> str:
    """
    Generate a password of exactly `length` characters drawn from the
    alphabet of `password_type`.

    `rng` defaults to the system CSPRNG; pass a seeded random.Random for
    reproducible output.
    """
    if length < 0:
        raise ValueError(f"Password length must not be negative: {length}")
    rng = rng or _SYSTEM_RNG

    if password_type == PasswordType.NUMERIC:
        return _generate_from(NUMERIC_CHARSET, length, rng)
    elif password_type == PasswordType.ALPHA:
        return _generate_from(ALPHA_CHARSET, length, rng)
    elif password_type == PasswordType.MIXED:
        return _generate_mixed(length, rng)
    elif password_type == PasswordType.SECURE:
        return _generate_from(SECURE_CHARSET, length, rng)
    elif password_type == PasswordType.UNAMBIGUOUS:
        return _generate_from(UNAMBIGUOUS_CHARSET, length, rng)
    else:
        raise ValueError(f"Unknown PasswordType: {password_type}")


def keep_generating(password_type: str, type_for_ending: str) -> bool:
    """
    Returns False when `password_type` is the ending selector (case-insensitive).
    """
    return password_type.lower() != type_for_ending.lower()


def control_type(allowed_types: str, password_type: str) -> bool:
    """
    Case-sensitive check that `password_type` is one of `allowed_types`.
    """
    return len(password_type) == 1 and password_type in allowed_types


def control_length(length: str, min_length: int, max_length: int) -> bool:
    """
    True if `length` is an all-digit string whose value is in [min_length, max_length].
    """
    if not length or not (length.isascii() and length.isdigit()):
        return False
    digits = length.lstrip('0') or '0'
    # Too many digits to be in range
    if len(digits) > len(str(max_length)):
        return False
    return min_length <= int(digits) <= max_length
