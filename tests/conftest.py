# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from signed_board.api.v1.endpoints import messages as messages_endpoints
from signed_board.core.settings import Settings
from signed_board.main import app as fastapi_app
from signed_board.repositories.message_repo import InMemoryMessageStore
from signed_board.schemas.message import Message
from signed_board.services.canonical import serialize_message
from signed_board.services.crypto import CryptoService

HELLO_TIMESTAMP = "2024-01-01T00:00:00Z"


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def message_store() -> InMemoryMessageStore:
    """Provide an empty store for each test."""
    return InMemoryMessageStore()


@pytest.fixture(autouse=True)
def override_message_store(app: FastAPI, message_store: InMemoryMessageStore) -> Iterator[None]:
    app.dependency_overrides[messages_endpoints.get_message_store_dep] = lambda: message_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(messages_endpoints.get_message_store_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return Settings()


@pytest.fixture()
def key_pair() -> tuple[str, str]:
    """Return a fresh (private_key_hex, public_key_hex) pair."""
    return CryptoService.generate_key_pair()


@pytest.fixture()
def hello_message() -> Message:
    return Message(content="hello", timestamp=HELLO_TIMESTAMP)


@pytest.fixture()
def make_signed_payload(key_pair: tuple[str, str]) -> Callable[..., dict[str, Any]]:
    """Return a factory building ``/submit`` bodies signed with ``key_pair``."""
    private_key_hex, public_key_hex = key_pair

    def _build(content: str = "hello", timestamp: str = HELLO_TIMESTAMP) -> dict[str, Any]:
        message = Message(content=content, timestamp=timestamp)
        signature = CryptoService.sign_message_hex(private_key_hex, serialize_message(message))
        return {
            "message": {"content": content, "timestamp": timestamp},
            "signature": signature.hex(),
            "publicKey": public_key_hex,
        }

    return _build
