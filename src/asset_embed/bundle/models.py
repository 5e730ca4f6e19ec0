"""Typed models for the asset bundling pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FileRecord:
    """One collected input file, keyed by its path exactly as matched."""

    path: str
    data: bytes
    mod_time_ns: int | None = None


@dataclass(slots=True, frozen=True)
class ByteRange:
    """Half-open span a file occupies within a packed buffer."""

    path: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(slots=True, frozen=True)
class PackedImage:
    """Concatenated payloads plus per-file ranges in encounter order."""

    data: bytes
    ranges: tuple[ByteRange, ...]

    def range_map(self) -> dict[str, ByteRange]:
        """Map ranges by path; a later duplicate path replaces an earlier one."""
        return {item.path: item for item in self.ranges}

    def slice(self, item: ByteRange) -> bytes:
        return self.data[item.start : item.end]

    def validate(self) -> None:
        """Raise ValueError unless ranges are contiguous and cover the buffer."""
        cursor = 0
        for item in self.ranges:
            if item.start != cursor:
                raise ValueError(
                    f"Range for '{item.path}' starts at {item.start}, expected {cursor}."
                )
            if item.end < item.start:
                raise ValueError(f"Range for '{item.path}' ends before it starts.")
            cursor = item.end
        if cursor != len(self.data):
            raise ValueError(
                f"Ranges cover {cursor} bytes but packed buffer holds {len(self.data)}."
            )


@dataclass(slots=True, frozen=True)
class CompressedBlob:
    """Compressed bytes for the packed buffer (path None) or one file."""

    path: str | None
    data: bytes
    raw_size: int


@dataclass(slots=True, frozen=True)
class EncodedLiteral:
    """Source-safe text rendering of compressed bytes, split into chunks."""

    scheme: str
    chunks: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(self.chunks)
