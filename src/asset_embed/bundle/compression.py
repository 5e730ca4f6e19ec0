"""Deterministic gzip compression of bundle payloads."""

from __future__ import annotations

import gzip
import zlib
from collections.abc import Sequence

from asset_embed.bundle.models import CompressedBlob, FileRecord, PackedImage
from asset_embed.errors import CompressionError

COMPRESS_LEVEL = 9


def compress_bytes(data: bytes) -> bytes:
    """Compress with a fixed header timestamp so output is reproducible."""
    try:
        return gzip.compress(data, compresslevel=COMPRESS_LEVEL, mtime=0)
    except (OSError, zlib.error) as exc:
        raise CompressionError(f"compression failed: {exc}") from exc


def decompress_bytes(blob: bytes) -> bytes:
    try:
        return gzip.decompress(blob)
    except (OSError, EOFError, zlib.error) as exc:
        raise CompressionError(f"decompression failed: {exc}") from exc


def compress_image(image: PackedImage) -> CompressedBlob:
    """Compress the whole packed buffer as a single stream."""
    return CompressedBlob(path=None, data=compress_bytes(image.data), raw_size=len(image.data))


def compress_records(records: Sequence[FileRecord]) -> list[CompressedBlob]:
    """Compress each record independently, preserving order."""
    return [
        CompressedBlob(
            path=record.path,
            data=compress_bytes(record.data),
            raw_size=len(record.data),
        )
        for record in records
    ]


def verify_round_trip(blob: CompressedBlob, expected: bytes) -> None:
    """Raise CompressionError unless the blob inflates to exactly `expected`."""
    restored = decompress_bytes(blob.data)
    if restored != expected:
        label = blob.path if blob.path is not None else "<packed>"
        raise CompressionError(
            f"round-trip mismatch for {label}: expected {len(expected)} bytes, "
            f"got {len(restored)}"
        )
