"""Sign a message offline and print a body ready for ``POST /submit``.

Typical usage:
  python -m signed_board.scripts.sign --content "hello"
  python -m signed_board.scripts.sign --content "hello" \
      --timestamp 2024-01-01T00:00:00Z --private-key <hex> --verify
"""

from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from signed_board.core.security import verify_signature
from signed_board.schemas.message import Message, SignedMessage
from signed_board.services.canonical import serialize_message
from signed_board.services.crypto import CryptoService
from signed_board.utils.codec import decode_hex
from signed_board.utils.time import utcnow


def build_signed_message(
    content: str,
    timestamp: str | None = None,
    private_key_hex: str | None = None,
) -> SignedMessage:
    """Sign ``content`` and return the resulting signed message.

    Args:
        content: Message text.
        timestamp: RFC 3339 timestamp; the current UTC time when omitted.
        private_key_hex: Hex P-256 private scalar; a fresh key when omitted.

    Raises:
        ValueError: If the timestamp or private key is invalid.
    """
    message = Message(content=content, timestamp=timestamp if timestamp is not None else utcnow())

    if private_key_hex is None:
        private_key_hex, public_key_hex = CryptoService.generate_key_pair()
    else:
        public_key_hex = CryptoService.public_key_hex(decode_hex(private_key_hex))

    signature = CryptoService.sign_message_hex(private_key_hex, serialize_message(message))
    return SignedMessage(message=message, signature=signature.hex(), public_key=public_key_hex)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sign a message for the Signed Board API")
    p.add_argument("--content", required=True, help="Message text to sign")
    p.add_argument("--timestamp", default=None,
                   help="RFC 3339 timestamp (default: current UTC time)")
    p.add_argument("--private-key", default=None,
                   help="Hex-encoded 32-byte P-256 private key (default: generate one)")
    p.add_argument("--verify", action="store_true",
                   help="Verify the produced signature before printing")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        signed = build_signed_message(args.content, args.timestamp, args.private_key)
    except (ValidationError, ValueError) as exc:
        print(f"[sign] {exc}", file=sys.stderr)
        return 2

    if args.verify:
        payload = serialize_message(signed.message)
        if not verify_signature(signed.public_key, signed.signature, payload):
            print("[sign] produced signature failed verification", file=sys.stderr)
            return 1

    print(json.dumps(signed.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
