# src/signed_board/api/v1/endpoints/signing.py
"""Demonstration endpoint that signs a fresh message server-side."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status

from signed_board.core.settings import settings
from signed_board.schemas.message import Message, SignedMessage
from signed_board.services.canonical import serialize_message
from signed_board.services.crypto import CryptoService
from signed_board.utils.time import utcnow

from .messages import serialize_signed_message

router = APIRouter(tags=["signing"])


@router.get("/sign-test")
async def sign_test() -> dict[str, Any]:
    """Generate a key pair, sign a sample message and return it.

    The result can be posted unchanged to ``/submit``.
    """
    if not settings.sign_test_enabled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sign test endpoint is disabled",
        )

    private_key_hex, public_key_hex = CryptoService.generate_key_pair()
    message = Message(content=settings.sign_test_content, timestamp=utcnow())
    signature = CryptoService.sign_message_hex(private_key_hex, serialize_message(message))

    signed_message = SignedMessage(
        message=message,
        signature=signature.hex(),
        public_key=public_key_hex,
    )
    return serialize_signed_message(signed_message)
