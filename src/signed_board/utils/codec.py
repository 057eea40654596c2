"""Hex codec for keys and signatures exchanged as text."""

from __future__ import annotations

import re

from signed_board.core.errors import InvalidEncodingError

_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


def decode_hex(data: str) -> bytes:
    """Decode a hex string into raw bytes.

    Unlike ``bytes.fromhex`` this rejects embedded whitespace, so the bytes
    returned always correspond one-to-one with the text that was supplied.

    Args:
        data: Hex text with an even number of digits (either case).

    Returns:
        The decoded bytes.

    Raises:
        InvalidEncodingError: If ``data`` is not a string of hex digit pairs.
    """
    if not isinstance(data, str):
        raise InvalidEncodingError(f"Hex input must be text, got {type(data).__name__}")
    if _HEX_PATTERN.fullmatch(data) is None:
        raise InvalidEncodingError("Invalid hex encoding: expected pairs of hex digits")
    return bytes.fromhex(data)


def encode_hex(data: bytes) -> str:
    """Return the lower-case hex encoding of ``data``."""
    return bytes(data).hex()
