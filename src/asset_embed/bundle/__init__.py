"""Bundling pipeline stages: collect, order, pack, compress, encode."""

from .collector import collect_sources, read_file, resolve_pattern, validate_pattern
from .compression import (
    compress_bytes,
    compress_image,
    compress_records,
    decompress_bytes,
    verify_round_trip,
)
from .literal import (
    DEFAULT_LINE_WIDTH,
    SCHEME_BASE64,
    SCHEME_HEX,
    SCHEMES,
    decode_literal,
    encode_literal,
)
from .models import ByteRange, CompressedBlob, EncodedLiteral, FileRecord, PackedImage
from .ordering import ORDER_BY_MTIME, ORDER_BY_NAME, ORDER_POLICIES, order_records
from .packer import pack_records, unpack_image

__all__ = [
    "ByteRange",
    "CompressedBlob",
    "DEFAULT_LINE_WIDTH",
    "EncodedLiteral",
    "FileRecord",
    "ORDER_BY_MTIME",
    "ORDER_BY_NAME",
    "ORDER_POLICIES",
    "PackedImage",
    "SCHEMES",
    "SCHEME_BASE64",
    "SCHEME_HEX",
    "collect_sources",
    "compress_bytes",
    "compress_image",
    "compress_records",
    "decode_literal",
    "decompress_bytes",
    "encode_literal",
    "order_records",
    "pack_records",
    "read_file",
    "resolve_pattern",
    "unpack_image",
    "validate_pattern",
    "verify_round_trip",
]
