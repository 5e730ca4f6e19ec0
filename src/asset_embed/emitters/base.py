"""Shared emitter protocol and request types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from asset_embed.bundle.models import ByteRange, EncodedLiteral
from asset_embed.errors import ConfigError

PACKING_PACKED = "packed"
PACKING_PER_FILE = "per-file"
PACKINGS = (PACKING_PACKED, PACKING_PER_FILE)

GENERATED_BANNER = "Code generated by asset-embed. DO NOT EDIT."


@dataclass(slots=True, frozen=True)
class EmitRequest:
    """Everything an emitter needs to render one artifact.

    The packed variant fills `packed` and `ranges`; the per-file variant
    fills `blobs` with one literal per record, in generation order.
    """

    package: str
    packing: str
    encoding: str
    packed: EncodedLiteral | None = None
    ranges: tuple[ByteRange, ...] = ()
    blobs: tuple[tuple[str, EncodedLiteral], ...] = ()

    def entry_count(self) -> int:
        if self.packing == PACKING_PACKED:
            return len(self.ranges)
        return len(self.blobs)


class ArtifactEmitter(Protocol):
    """Renderer for one target language."""

    name: str
    default_extension: str

    def render(self, request: EmitRequest) -> str:
        """Return the complete artifact text."""


def validate_packing(packing: str) -> None:
    if packing not in PACKINGS:
        raise ConfigError(f"Unknown packing '{packing}'; expected one of {PACKINGS}.")


def validate_request(request: EmitRequest) -> None:
    """Raise ConfigError when the request does not match its packing."""
    validate_packing(request.packing)
    if request.packing == PACKING_PACKED and request.packed is None:
        raise ConfigError("Packed artifacts require a packed literal.")
    if request.packing == PACKING_PER_FILE and request.packed is not None:
        raise ConfigError("Per-file artifacts must not carry a packed literal.")


def require_identifier(value: str, pattern: re.Pattern[str], what: str) -> str:
    if not pattern.fullmatch(value):
        raise ConfigError(f"Invalid {what} '{value}'.")
    return value
