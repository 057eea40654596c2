# src/signed_board/services/crypto.py
"""Cryptographic services for Signed Board.

All keys live on NIST P-256 and all signatures are ECDSA over a SHA-256 digest,
DER-encoded. Public keys travel as SEC1 uncompressed points.
"""

from __future__ import annotations

import hashlib
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
)

from signed_board.core.errors import (
    InvalidEncodingError,
    InvalidKeyError,
    InvalidSignatureError,
    SignatureError,
    VerificationFailedError,
)
from signed_board.utils.codec import decode_hex

logger = logging.getLogger(__name__)

CURVE = ec.SECP256R1()
# Field prime p and group order n of P-256 (FIPS 186-4, D.1.2.3)
CURVE_FIELD_PRIME = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
CURVE_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551

COORDINATE_LENGTH_BYTES = 32
PUBKEY_LENGTH_BYTES = 1 + 2 * COORDINATE_LENGTH_BYTES
PRIVATE_KEY_LENGTH_BYTES = 32
UNCOMPRESSED_POINT_TAG = 0x04


class CryptoService:
    """Service handling cryptographic operations."""

    @staticmethod
    def decode_public_key(data: bytes) -> ec.EllipticCurvePublicKey:
        """Rebuild a P-256 public key from its uncompressed point encoding.

        Args:
            data: ``0x04 || X || Y`` with 32-byte big-endian coordinates.

        Returns:
            The public key for the encoded point.

        Raises:
            InvalidKeyError: If the encoding is malformed or the point is not
                on the curve.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidKeyError(f"Public key must be bytes, got {type(data).__name__}")
        if len(data) != PUBKEY_LENGTH_BYTES:
            raise InvalidKeyError(f"P-256 public keys must be {PUBKEY_LENGTH_BYTES} bytes")
        if data[0] != UNCOMPRESSED_POINT_TAG:
            raise InvalidKeyError("Public key must use the uncompressed point encoding")

        x = int.from_bytes(data[1 : 1 + COORDINATE_LENGTH_BYTES], "big")
        y = int.from_bytes(data[1 + COORDINATE_LENGTH_BYTES :], "big")
        if x >= CURVE_FIELD_PRIME or y >= CURVE_FIELD_PRIME:
            raise InvalidKeyError("Public key coordinates exceed the field size")

        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(CURVE, bytes(data))
        except ValueError as err:
            raise InvalidKeyError(f"Public key is not a point on P-256: {err}") from err

    @staticmethod
    def encode_public_key(public_key: ec.EllipticCurvePublicKey) -> bytes:
        """Return the 65-byte uncompressed point encoding of ``public_key``."""
        return public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )

    @staticmethod
    def decode_signature(signature: bytes) -> tuple[int, int]:
        """Parse a DER ECDSA signature into its ``(r, s)`` scalars.

        Raises:
            InvalidSignatureError: If the DER is malformed or either scalar is
                outside ``[1, n)``.
        """
        if not isinstance(signature, (bytes, bytearray)):
            raise InvalidSignatureError(
                f"Signature must be bytes, got {type(signature).__name__}"
            )
        try:
            r, s = decode_dss_signature(bytes(signature))
        except ValueError as err:
            raise InvalidSignatureError(f"Malformed DER signature: {err}") from err
        if not (0 < r < CURVE_ORDER and 0 < s < CURVE_ORDER):
            raise InvalidSignatureError("Signature scalars are out of range")
        return r, s

    @staticmethod
    def digest_message(message: bytes) -> bytes:
        """Return the SHA-256 digest of the signed message bytes."""
        return hashlib.sha256(message).digest()

    @staticmethod
    def check_signature(
        public_key: ec.EllipticCurvePublicKey,
        signature: bytes,
        message: bytes,
    ) -> None:
        """Verify ``signature`` over ``message``, raising on any failure.

        Args:
            public_key: Decoded signer key.
            signature: DER-encoded ECDSA signature.
            message: Exact bytes that were signed.

        Raises:
            InvalidSignatureError: If the signature cannot be decoded.
            VerificationFailedError: If the signature does not match.
        """
        CryptoService.decode_signature(signature)
        digest = CryptoService.digest_message(message)
        try:
            public_key.verify(
                bytes(signature),
                digest,
                ec.ECDSA(Prehashed(hashes.SHA256())),
            )
        except (InvalidSignature, ValueError) as err:
            raise VerificationFailedError("Signature does not match the message") from err

    @staticmethod
    def verify_signature_bytes(
        public_key: ec.EllipticCurvePublicKey,
        signature: bytes,
        message: bytes,
    ) -> bool:
        """Verify an ECDSA P-256/SHA-256 signature over raw bytes.

        Returns:
            True if the signature is valid, False otherwise.
        """
        try:
            CryptoService.check_signature(public_key, signature, message)
        except SignatureError as err:
            logger.debug("Signature rejected: %s", err)
            return False
        return True

    @staticmethod
    def generate_key_pair() -> tuple[str, str]:
        """Generate a new P-256 key pair.

        Returns:
            Tuple of (private_key_hex, public_key_hex) where the private key is
            the 32-byte scalar and the public key the uncompressed point.
        """
        private_key = ec.generate_private_key(CURVE)
        private_value = private_key.private_numbers().private_value
        private_hex = private_value.to_bytes(PRIVATE_KEY_LENGTH_BYTES, "big").hex()
        public_hex = CryptoService.encode_public_key(private_key.public_key()).hex()
        return private_hex, public_hex

    @staticmethod
    def load_private_key(private_key_bytes: bytes) -> ec.EllipticCurvePrivateKey:
        """Build a P-256 private key from its 32-byte big-endian scalar."""
        if len(private_key_bytes) != PRIVATE_KEY_LENGTH_BYTES:
            raise ValueError(f"P-256 private keys must be {PRIVATE_KEY_LENGTH_BYTES} bytes")
        return ec.derive_private_key(int.from_bytes(private_key_bytes, "big"), CURVE)

    @staticmethod
    def public_key_hex(private_key_bytes: bytes) -> str:
        """Return the hex uncompressed public key matching a private scalar."""
        private_key = CryptoService.load_private_key(private_key_bytes)
        return CryptoService.encode_public_key(private_key.public_key()).hex()

    @staticmethod
    def sign_message(private_key_bytes: bytes, message: bytes) -> bytes:
        """Sign a message with a P-256 private key.

        Args:
            private_key_bytes: Raw 32-byte private scalar
            message: Message to sign

        Returns:
            DER-encoded signature bytes
        """
        try:
            private_key = CryptoService.load_private_key(private_key_bytes)
        except ValueError as err:
            raise ValueError(f"Invalid private key: {err}") from err
        digest = CryptoService.digest_message(message)
        return private_key.sign(digest, ec.ECDSA(Prehashed(hashes.SHA256())))

    @staticmethod
    def sign_message_hex(private_key_hex: str, message: bytes) -> bytes:
        """Sign a message with a hex-encoded P-256 private key.

        Args:
            private_key_hex: Hex-encoded 32-byte private scalar
            message: Message to sign

        Returns:
            DER-encoded signature bytes
        """
        try:
            private_key_bytes = decode_hex(private_key_hex)
        except InvalidEncodingError as err:
            raise ValueError(f"Invalid private key hex: {err}") from err
        return CryptoService.sign_message(private_key_bytes, message)
