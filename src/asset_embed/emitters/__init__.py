"""Artifact emitters for supported target languages."""

from .base import (
    GENERATED_BANNER,
    PACKING_PACKED,
    PACKING_PER_FILE,
    PACKINGS,
    ArtifactEmitter,
    EmitRequest,
    validate_packing,
    validate_request,
)
from .go import GoEmitter
from .python import PythonEmitter
from .registry import EmitterRegistry
from .runtime import build_emitter_registry

__all__ = [
    "ArtifactEmitter",
    "EmitRequest",
    "EmitterRegistry",
    "GENERATED_BANNER",
    "GoEmitter",
    "PACKINGS",
    "PACKING_PACKED",
    "PACKING_PER_FILE",
    "PythonEmitter",
    "build_emitter_registry",
    "validate_packing",
    "validate_request",
]
