# src/signed_board/api/v1/endpoints/messages.py
"""Signed message submission and listing endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from signed_board.core.security import verify_signature
from signed_board.core.settings import settings
from signed_board.repositories.message_repo import MessageStore, get_message_store
from signed_board.schemas.message import SignedMessage
from signed_board.services.canonical import serialize_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


def get_message_store_dep() -> MessageStore:
    """Return the shared message store."""
    return get_message_store()


MessageStoreDep = Annotated[MessageStore, Depends(get_message_store_dep)]


def serialize_signed_message(signed_message: SignedMessage) -> dict[str, Any]:
    """Serialize a SignedMessage into API payload form.

    Timestamps keep every fractional digit that was signed.
    """
    return signed_message.model_dump(mode="json", by_alias=True)


@router.post("/submit", status_code=status.HTTP_201_CREATED)
async def submit_message(
    signed_message: SignedMessage,
    store: MessageStoreDep,
) -> dict[str, Any]:
    """Verify a signed message and store it if the signature is valid.

    The message is re-encoded canonically and the signature is checked against
    those bytes under the supplied public key. The response never says why a
    signature was rejected.
    """
    if len(signed_message.message.content) > settings.max_content_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message content is too long",
        )

    payload = serialize_message(signed_message.message)
    if not verify_signature(signed_message.public_key, signed_message.signature, payload):
        logger.info("Rejected message with an invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid signature",
        )

    count = store.append(signed_message)
    logger.info("Verified and stored message: %s", signed_message.message.content)
    return {"status": "message_verified", "count": count}


@router.get("/messages")
async def list_messages(store: MessageStoreDep) -> list[dict[str, Any]]:
    """Return every verified message, oldest first."""
    return [serialize_signed_message(message) for message in store.list_all()]
