"""Render compressed bytes as text that is safe inside a string literal."""

from __future__ import annotations

import base64
import binascii
import re

from asset_embed.bundle.models import EncodedLiteral
from asset_embed.errors import ConfigError

SCHEME_BASE64 = "base64"
SCHEME_HEX = "hex"
SCHEMES = (SCHEME_BASE64, SCHEME_HEX)
DEFAULT_LINE_WIDTH = 76

_HEX_ESCAPE_WIDTH = 4
_HEX_ESCAPE = re.compile(r"\\x([0-9a-f]{2})")


def encode_hex(data: bytes) -> str:
    """Escape every byte as a fixed two-digit `\\xNN` sequence."""
    return "".join(f"\\x{byte:02x}" for byte in data)


def decode_hex(text: str) -> bytes:
    if len(text) % _HEX_ESCAPE_WIDTH != 0:
        raise ValueError("Hex literal length must be a multiple of 4.")
    escapes = _HEX_ESCAPE.findall(text)
    if len(escapes) * _HEX_ESCAPE_WIDTH != len(text):
        raise ValueError("Hex literal contains text outside \\xNN escapes.")
    return bytes(int(pair, 16) for pair in escapes)


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_base64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 literal: {exc}") from exc


def chunk_text(text: str, width: int, step: int = 1) -> tuple[str, ...]:
    """Split text into lines of at most `width` characters.

    Chunk boundaries fall on multiples of `step` so an escape sequence of
    `step` characters is never split. A non-positive width keeps one chunk.
    """
    if width <= 0 or len(text) <= width:
        return (text,)
    size = max(step, width - width % step)
    return tuple(text[offset : offset + size] for offset in range(0, len(text), size))


def encode_literal(
    data: bytes,
    scheme: str = SCHEME_BASE64,
    width: int = DEFAULT_LINE_WIDTH,
) -> EncodedLiteral:
    """Encode bytes with the named scheme and wrap at `width`."""
    if scheme == SCHEME_BASE64:
        return EncodedLiteral(scheme=scheme, chunks=chunk_text(encode_base64(data), width))
    if scheme == SCHEME_HEX:
        return EncodedLiteral(
            scheme=scheme,
            chunks=chunk_text(encode_hex(data), width, step=_HEX_ESCAPE_WIDTH),
        )
    raise ConfigError(f"Unknown literal encoding '{scheme}'; expected one of {SCHEMES}.")


def decode_literal(literal: EncodedLiteral) -> bytes:
    """Reverse `encode_literal`; chunking never affects the decoded value."""
    if literal.scheme == SCHEME_BASE64:
        return decode_base64(literal.text)
    if literal.scheme == SCHEME_HEX:
        return decode_hex(literal.text)
    raise ConfigError(f"Unknown literal encoding '{literal.scheme}'.")
