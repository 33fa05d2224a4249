"""Base-16 hex string helpers for `0x`-prefixed RPC data."""

from __future__ import annotations

import re

_HEX_PATTERN = re.compile(r"^0x[0-9A-Fa-f]*$")
_PREFIX = "0x"


class HexError(ValueError):
    """Raised when a string is not a usable hexadecimal value."""


def is_hex(value: object, byte_length: int | None = None) -> bool:
    """Return whether value is a `0x`-prefixed hex string.

    The payload may be empty: `"0x"` is hex, and `is_hex("0x", 0)` is True.

    Args:
        value: Candidate value; non-strings are never hex.
        byte_length: Optional exact payload size in bytes.

    Returns:
        True when value is hex and, if requested, encodes exactly
        `byte_length` bytes.
    """
    if not isinstance(value, str):
        return False
    if byte_length is not None:
        if isinstance(byte_length, bool) or byte_length < 0:
            return False
        if len(value) != len(_PREFIX) + 2 * byte_length:
            return False
    return _HEX_PATTERN.fullmatch(value) is not None


def has_prefix(value: str) -> bool:
    """Return whether value begins with `0x`."""
    return value.startswith(_PREFIX)


def add_prefix(value: str) -> str:
    """Return value with a `0x` prefix, adding one only when missing."""
    if has_prefix(value):
        return value
    return _PREFIX + value


def remove_prefix(value: str) -> str:
    """Strip the leading `0x`.

    Raises:
        HexError: If value has no prefix.
    """
    if not has_prefix(value):
        raise HexError(f"Invalid hexadecimal string: {value!r}")
    return value[len(_PREFIX) :]


def _require_hex(value: str) -> str:
    if not is_hex(value) or value == _PREFIX:
        raise HexError(f"Invalid hexadecimal string: {value!r}")
    return value


def pad_to_byte_length(value: str, byte_length: int) -> str:
    """Left-pad hex digits with zeros up to `byte_length` bytes.

    Args:
        value: Non-empty hex string.
        byte_length: Target size in bytes.

    Returns:
        Prefixed, zero-padded hex string. Longer payloads are returned as-is.

    Raises:
        HexError: If value is not hex or has no digits.
    """
    digits = remove_prefix(_require_hex(value))
    return add_prefix(digits.rjust(byte_length * 2, "0"))


def pad_to_even_length(value: str) -> str:
    """Prepend one zero digit when the payload has an odd digit count.

    Raises:
        HexError: If value is not hex or has no digits.
    """
    digits = remove_prefix(_require_hex(value))
    if len(digits) % 2 == 0:
        return value
    return add_prefix("0" + digits)


def from_int(value: int) -> str:
    """Encode a non-negative integer with the fewest hex digits (`0` is `0x0`).

    Raises:
        HexError: If value is negative or not an int.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise HexError(f"Cannot hex-encode {value!r}")
    return f"{_PREFIX}{value:x}"


def to_int(value: str) -> int:
    """Decode a hex quantity into an integer.

    Raises:
        HexError: If value is not hex or has no digits.
    """
    return int(remove_prefix(_require_hex(value)), 16)
