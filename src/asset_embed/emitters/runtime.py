"""Runtime construction for the emitter registry."""

from __future__ import annotations

from asset_embed.emitters.go import GoEmitter
from asset_embed.emitters.python import PythonEmitter
from asset_embed.emitters.registry import EmitterRegistry


def build_emitter_registry() -> EmitterRegistry:
    """Build the registry with the default target registered first."""
    registry = EmitterRegistry()
    registry.register(PythonEmitter())
    registry.register(GoEmitter())
    return registry
