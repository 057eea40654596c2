# tests/v1/test_messages.py
"""Tests for signed message submission and listing endpoints."""

import json

import pytest
from fastapi import status

from signed_board.core.settings import settings


def test_submit_valid_message(client, make_signed_payload, message_store) -> None:
    """A correctly signed message is accepted and stored."""
    payload = make_signed_payload()

    response = client.post("/submit", json=payload)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"status": "message_verified", "count": 1}
    assert len(message_store) == 1
    assert message_store.list_all()[0].message.content == "hello"


def test_submit_tampered_content_is_rejected(client, make_signed_payload, message_store) -> None:
    payload = make_signed_payload()
    payload["message"]["content"] = "hello!"

    response = client.post("/submit", json=payload)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid signature"
    assert len(message_store) == 0


def test_submit_tampered_timestamp_is_rejected(client, make_signed_payload, message_store) -> None:
    payload = make_signed_payload(timestamp="2024-01-01T00:00:00.5Z")
    payload["message"]["timestamp"] = "2024-01-01T00:00:00.50Z"

    # Same instant, same canonical bytes: trailing zeros are not significant.
    assert client.post("/submit", json=payload).status_code == status.HTTP_201_CREATED

    payload["message"]["timestamp"] = "2024-01-01T09:00:00.5+09:00"
    response = client.post("/submit", json=payload)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert len(message_store) == 1


def test_submit_with_someone_elses_key_is_rejected(client, make_signed_payload) -> None:
    from signed_board.services.crypto import CryptoService

    payload = make_signed_payload()
    _, payload["publicKey"] = CryptoService.generate_key_pair()

    response = client.post("/submit", json=payload)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("signature", "not-hex"),
        ("publicKey", "not-hex"),
        ("signature", ""),
        ("publicKey", "04" + "00" * 64),
    ],
)
def test_submit_malformed_crypto_fields_are_rejected_uniformly(
    client, make_signed_payload, field, value
) -> None:
    payload = make_signed_payload()
    payload[field] = value

    response = client.post("/submit", json=payload)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid signature"


def test_submit_nanosecond_timestamp(client, make_signed_payload) -> None:
    """Signers may hash timestamps with nanosecond precision."""
    timestamp = "2024-01-01T12:34:56.123456789+02:00"
    payload = make_signed_payload(content="precise", timestamp=timestamp)

    response = client.post("/submit", json=payload)
    assert response.status_code == status.HTTP_201_CREATED

    listed = client.get("/messages").json()
    assert listed[0]["message"]["timestamp"] == timestamp


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"message": {"content": "hello"}, "signature": "30", "publicKey": "04"},
        {"message": {"content": "hello", "timestamp": "yesterday"}, "signature": "30", "publicKey": "04"},
        {"message": {"content": "hello", "timestamp": "2024-01-01T00:00:00"}, "signature": "30", "publicKey": "04"},
        {"message": {"content": "hello", "timestamp": "2024-01-01T00:00:00Z"}, "signature": "30"},
    ],
)
def test_submit_malformed_body(client, body, message_store) -> None:
    response = client.post("/submit", json=body)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert len(message_store) == 0


def test_submit_content_too_long(client, make_signed_payload, monkeypatch) -> None:
    monkeypatch.setattr(settings, "max_content_length", 4)
    payload = make_signed_payload(content="hello")

    response = client.post("/submit", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "too long" in response.json()["detail"]


def test_list_messages_empty(client) -> None:
    response = client.get("/messages")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_list_messages_returns_submitted_payloads_in_order(client, make_signed_payload) -> None:
    first = make_signed_payload(content="first")
    second = make_signed_payload(content="second", timestamp="2024-01-02T00:00:00Z")
    client.post("/submit", json=first)
    client.post("/submit", json=second)

    response = client.get("/messages")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [first, second]


def test_cors_headers_on_listing(client) -> None:
    response = client.get("/messages", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_submit_lone_surrogate_is_stored_as_replacement_character(
    client, make_signed_payload, message_store
) -> None:
    payload = make_signed_payload(content="x\ud800y")
    # ensure_ascii keeps the lone surrogate as a JSON escape on the wire.
    body = json.dumps(payload)

    response = client.post("/submit", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == status.HTTP_201_CREATED
    assert message_store.list_all()[0].message.content == "x\ufffdy"

    listed = client.get("/messages")
    assert listed.status_code == status.HTTP_200_OK
    assert listed.json()[0]["message"]["content"] == "x\ufffdy"


def test_submit_ignores_extra_nanoseconds_key(client, make_signed_payload, message_store) -> None:
    """Only content and timestamp are part of the signed message."""
    payload = make_signed_payload(timestamp="2024-01-01T00:00:00.000000005Z")
    payload["message"] = {
        "content": "hello",
        "timestamp": "2024-01-01T00:00:00Z",
        "extra_nanoseconds": 5,
    }

    response = client.post("/submit", json=payload)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert len(message_store) == 0


@pytest.mark.parametrize("timestamp", ["2024-01-01 00:00:00Z", 1704067200])
def test_submit_rejects_non_rfc3339_timestamps(client, make_signed_payload, timestamp) -> None:
    payload = make_signed_payload()
    payload["message"]["timestamp"] = timestamp

    response = client.post("/submit", json=payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
