"""Concatenate record payloads into one buffer with an offset table."""

from __future__ import annotations

from collections.abc import Sequence

from asset_embed.bundle.models import ByteRange, FileRecord, PackedImage


def pack_records(records: Sequence[FileRecord]) -> PackedImage:
    """Pack records in order; each range is [start, end) of the buffer."""
    buffer = bytearray()
    ranges: list[ByteRange] = []
    for record in records:
        start = len(buffer)
        buffer.extend(record.data)
        ranges.append(ByteRange(path=record.path, start=start, end=len(buffer)))
    return PackedImage(data=bytes(buffer), ranges=tuple(ranges))


def unpack_image(image: PackedImage) -> dict[str, bytes]:
    """Partition a packed buffer back into a name to bytes mapping."""
    return {item.path: image.slice(item) for item in image.ranges}
