"""Exceptions raised while decoding and verifying signed messages.

Every failure is a ``ValueError`` so callers that only care about "bad input"
can catch a single type. The verification boundary collapses all of them into
``False`` and never reports which step failed.
"""

from __future__ import annotations


class SignatureError(ValueError):
    """Base class for signature pipeline failures."""


class InvalidEncodingError(SignatureError):
    """Raised when hex text cannot be decoded into bytes."""


class InvalidKeyError(SignatureError):
    """Raised when bytes do not encode a valid P-256 public key."""


class InvalidSignatureError(SignatureError):
    """Raised when a signature is not a well-formed DER ECDSA signature."""


class VerificationFailedError(SignatureError):
    """Raised when well-formed inputs fail the cryptographic check."""
