# src/signed_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .messages import router as messages_router
from .signing import router as signing_router

__all__ = [
    "messages_router",
    "signing_router",
]
