# src/signed_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import messages_router, signing_router

__all__ = [
    "messages_router",
    "signing_router",
]
