# src/signed_board/services/__init__.py
"""Business logic services for the Signed Board application."""

from .canonical import CANONICAL_VERSION, serialize_message
from .crypto import CryptoService

__all__ = [
    "CANONICAL_VERSION",
    "CryptoService",
    "serialize_message",
]
