# src/signed_board/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .message import Message, SignedMessage

__all__ = ["Message", "SignedMessage"]
