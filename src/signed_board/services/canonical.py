"""Canonical byte encoding of messages for signing and verification.

Signer and verifier must hash byte-identical input, so the encoding is pinned
rather than left to a general-purpose serializer:

* a UTF-8 JSON object without whitespace, members in the order
  ``content``, ``timestamp``;
* strings escaped as Go's ``encoding/json`` does by default: ``<``, ``>``,
  ``&``, U+2028 and U+2029 become ``\\u`` escapes, lone surrogates become
  ``\\ufffd``;
* the timestamp formatted as RFC 3339 with up to nine fractional digits
  (see :func:`signed_board.utils.time.format_rfc3339`).

This matches what Go clients hash when marshalling
``struct{Content string; Timestamp time.Time}``.
"""

from __future__ import annotations

import json
import re

from signed_board.schemas.message import Message
from signed_board.utils.time import format_rfc3339

CANONICAL_VERSION = 1

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_ESCAPE_PATTERN = re.compile("[<>&\u2028\u2029\ud800-\udfff]")
_INVALID_CHARACTER = "\\ufffd"


def _escape(match: re.Match[str]) -> str:
    return _ESCAPES.get(match.group(0), _INVALID_CHARACTER)


def encode_json_string(value: str) -> str:
    """Return ``value`` as a canonical JSON string literal."""
    encoded = json.dumps(value, ensure_ascii=False)
    return _ESCAPE_PATTERN.sub(_escape, encoded)


def serialize_message(message: Message) -> bytes:
    """Return the canonical bytes that are hashed and signed for ``message``.

    Args:
        message: The message to encode.

    Returns:
        UTF-8 bytes, identical for equal field values on every call.

    Example:
        >>> from datetime import UTC, datetime
        >>> serialize_message(Message(content="hello", timestamp=datetime(2024, 1, 1, tzinfo=UTC)))
        b'{"content":"hello","timestamp":"2024-01-01T00:00:00Z"}'
    """
    members = (
        ("content", message.content),
        ("timestamp", format_rfc3339(message.timestamp, message.extra_nanoseconds)),
    )
    body = ",".join(
        f"{encode_json_string(name)}:{encode_json_string(value)}" for name, value in members
    )
    return ("{" + body + "}").encode("utf-8")
