"""Signature verification entry point used by the HTTP layer."""
from __future__ import annotations

import logging

from signed_board.core.errors import SignatureError
from signed_board.services.crypto import CryptoService
from signed_board.utils.codec import decode_hex

logger = logging.getLogger(__name__)


def verify_signature(public_key_hex: str, signature_hex: str, message: bytes) -> bool:
    """Verify an ECDSA P-256 signature over SHA-256 of ``message``.

    Args:
        public_key_hex: Hex-encoded uncompressed public key (65 bytes).
        signature_hex: Hex-encoded DER signature.
        message: Exact bytes that were signed on the client.

    Returns:
        True if the signature is valid for `message` under `public_key_hex`;
        False for every other outcome, including malformed input.
    """
    if not isinstance(message, (bytes, bytearray, memoryview)):
        return False
    try:
        public_key_bytes = decode_hex(public_key_hex)
        signature = decode_hex(signature_hex)
        public_key = CryptoService.decode_public_key(public_key_bytes)
    except SignatureError as err:
        logger.debug("Rejected signature input: %s", err)
        return False
    return CryptoService.verify_signature_bytes(public_key, signature, bytes(message))
