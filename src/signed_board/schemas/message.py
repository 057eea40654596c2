"""Message-related Pydantic schemas."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    field_serializer,
    field_validator,
    model_validator,
)

from signed_board.utils.time import format_rfc3339

# Same shape Go's time.Time accepts when decoding JSON.
_RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)
# Go's time.Parse keeps at most nine fractional digits.
_FRACTION_PATTERN = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d{7,})")
_MAX_FRACTION_DIGITS = 9
_MICROSECOND_DIGITS = 6
_SURROGATE_PATTERN = re.compile(r"[\ud800-\udfff]")
_REPLACEMENT_CHARACTER = "\ufffd"


class Message(BaseModel):
    """A user message exactly as it was signed."""

    content: str = Field(..., description="Message text")
    timestamp: AwareDatetime = Field(..., description="RFC 3339 instant with offset")

    _extra_nanoseconds: int = PrivateAttr(default=0)

    model_config = ConfigDict(frozen=True)

    @property
    def extra_nanoseconds(self) -> int:
        """Sub-microsecond part of the signed timestamp."""
        return self._extra_nanoseconds

    @model_validator(mode="wrap")
    @classmethod
    def split_nanoseconds(
        cls, data: Any, handler: ModelWrapValidatorHandler[Message]
    ) -> Message:
        """Keep fraction digits beyond microseconds out of ``datetime``.

        ``datetime`` stops at microseconds, but signers may hash timestamps with
        nanosecond precision; dropping those digits would change the signed bytes.
        """
        if not isinstance(data, dict):
            return handler(data)

        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            if _RFC3339_PATTERN.fullmatch(timestamp) is None:
                raise ValueError("timestamp must be an RFC 3339 string")
        elif not isinstance(timestamp, datetime) and timestamp is not None:
            raise ValueError("timestamp must be an RFC 3339 string")

        nanoseconds = 0
        match = _FRACTION_PATTERN.search(timestamp) if isinstance(timestamp, str) else None
        if match is not None:
            digits = match.group(2)[:_MAX_FRACTION_DIGITS].ljust(_MAX_FRACTION_DIGITS, "0")
            start, end = match.span(2)
            data = {
                **data,
                "timestamp": timestamp[:start] + digits[:_MICROSECOND_DIGITS] + timestamp[end:],
            }
            nanoseconds = int(digits[_MICROSECOND_DIGITS:])

        message = handler(data)
        message._extra_nanoseconds = nanoseconds
        return message

    @field_validator("content", mode="before")
    @classmethod
    def replace_surrogates(cls, value: Any) -> Any:
        """Decode lone surrogates to U+FFFD, as Go's JSON decoder does."""
        if isinstance(value, str):
            return _SURROGATE_PATTERN.sub(_REPLACEMENT_CHARACTER, value)
        return value

    @field_serializer("timestamp", when_used="json")
    def serialize_timestamp(self, value: AwareDatetime) -> str:
        """Render the timestamp with its full signed precision."""
        return format_rfc3339(value, self._extra_nanoseconds)


class SignedMessage(BaseModel):
    """A message together with its detached signature and signer key."""

    message: Message
    signature: str = Field(..., description="Hex-encoded DER ECDSA signature")
    public_key: str = Field(
        ...,
        alias="publicKey",
        description="Hex-encoded uncompressed P-256 public key",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)
