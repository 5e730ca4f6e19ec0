"""Generation pipeline: collect, order, pack, compress, encode, emit, write."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from asset_embed.bundle import (
    CompressedBlob,
    EncodedLiteral,
    FileRecord,
    PackedImage,
    collect_sources,
    compress_image,
    compress_records,
    decode_literal,
    encode_literal,
    order_records,
    pack_records,
    verify_round_trip,
)
from asset_embed.config import GeneratorConfig
from asset_embed.emitters import (
    PACKING_PACKED,
    EmitRequest,
    EmitterRegistry,
    build_emitter_registry,
    validate_packing,
)
from asset_embed.errors import (
    AssetEmbedError,
    CompressionError,
    ConfigError,
    EmptyBundleError,
    WriteError,
)
from asset_embed.logging import GenerationEvent, JsonlAuditLogger, new_run_id

MISSING_PATTERNS_MESSAGE = "Missing <file pattern>"


@dataclass(slots=True, frozen=True)
class GenerationResult:
    """Rendered artifact and the intermediate data it was built from."""

    artifact: str
    output_path: Path
    records: tuple[FileRecord, ...]
    packed: PackedImage | None
    raw_size: int
    compressed_size: int
    digest: str


def _encode_verified(blob: CompressedBlob, config: GeneratorConfig) -> EncodedLiteral:
    literal = encode_literal(blob.data, config.output.encoding, config.output.line_width)
    if decode_literal(literal) != blob.data:
        label = blob.path if blob.path is not None else "<packed>"
        raise CompressionError(f"literal round-trip mismatch for {label}")
    return literal


def build_request(
    records: Sequence[FileRecord], config: GeneratorConfig
) -> tuple[EmitRequest, PackedImage | None, int]:
    """Pack, compress and encode ordered records into an emit request.

    Returns the request, the packed image (packed variant only) and the total
    compressed size in bytes.
    """
    validate_packing(config.bundle.packing)
    if config.bundle.packing == PACKING_PACKED:
        image = pack_records(records)
        try:
            image.validate()
        except ValueError as exc:
            raise AssetEmbedError(f"offset table is inconsistent: {exc}") from exc
        blob = compress_image(image)
        verify_round_trip(blob, image.data)
        request = EmitRequest(
            package=config.output.package,
            packing=config.bundle.packing,
            encoding=config.output.encoding,
            packed=_encode_verified(blob, config),
            ranges=image.ranges,
        )
        return request, image, len(blob.data)

    blobs = compress_records(records)
    entries: list[tuple[str, EncodedLiteral]] = []
    for record, blob in zip(records, blobs, strict=True):
        verify_round_trip(blob, record.data)
        entries.append((record.path, _encode_verified(blob, config)))
    request = EmitRequest(
        package=config.output.package,
        packing=config.bundle.packing,
        encoding=config.output.encoding,
        blobs=tuple(entries),
    )
    return request, None, sum(len(blob.data) for blob in blobs)


def generate(
    config: GeneratorConfig, registry: EmitterRegistry | None = None
) -> GenerationResult:
    """Run every stage up to rendering; nothing touches the output path."""
    if not config.bundle.patterns:
        raise ConfigError(MISSING_PATTERNS_MESSAGE)
    emitter = (registry or build_emitter_registry()).select(config.output.target)

    records = collect_sources(config.bundle.patterns)
    if not records:
        raise EmptyBundleError()
    ordered = order_records(records, config.bundle.order)
    request, image, compressed_size = build_request(ordered, config)
    artifact = emitter.render(request)
    return GenerationResult(
        artifact=artifact,
        output_path=config.output_path(emitter.default_extension),
        records=tuple(ordered),
        packed=image,
        raw_size=sum(len(record.data) for record in ordered),
        compressed_size=compressed_size,
        digest=hashlib.sha256(artifact.encode("utf-8")).hexdigest(),
    )


def write_artifact(path: Path, text: str) -> None:
    """Create parent directories and overwrite `path` with `text`."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise WriteError(str(path), exc) from exc


def run(
    config: GeneratorConfig,
    *,
    registry: EmitterRegistry | None = None,
    audit_logger: JsonlAuditLogger | None = None,
) -> GenerationResult:
    """Generate and write the artifact, recording the outcome when logging is on.

    A failed audit write never replaces a generation error; it is attached to
    that error as a note instead. After a successful write it raises
    `WriteError` for the audit log path.
    """
    started = time.perf_counter()
    run_id = new_run_id()
    metadata: dict[str, object] = {"config": config.to_public_dict()}
    try:
        result = generate(config, registry=registry)
        write_artifact(result.output_path, result.artifact)
    except AssetEmbedError as exc:
        if audit_logger is not None:
            metadata["elapsed_seconds"] = time.perf_counter() - started
            try:
                audit_logger.append(GenerationEvent.failed(run_id, exc, metadata))
            except WriteError as audit_exc:
                exc.add_note(f"audit log not updated: {audit_exc.reason}")
        raise
    if audit_logger is not None:
        metadata.update(
            {
                "file_count": len(result.records),
                "output_path": str(result.output_path),
                "raw_bytes": result.raw_size,
                "compressed_bytes": result.compressed_size,
                "artifact_bytes": len(result.artifact.encode("utf-8")),
                "artifact_sha256": result.digest,
                "elapsed_seconds": time.perf_counter() - started,
            }
        )
        audit_logger.append(GenerationEvent.succeeded(run_id, metadata))
    return result
