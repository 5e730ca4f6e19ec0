"""Emitter registry with deterministic selection behavior."""

from __future__ import annotations

from dataclasses import dataclass, field

from asset_embed.emitters.base import ArtifactEmitter
from asset_embed.errors import ConfigError


@dataclass(slots=True)
class EmitterRegistry:
    """Ordered emitter registry keyed by target name."""

    _emitters: dict[str, ArtifactEmitter] = field(default_factory=dict)

    def register(self, emitter: ArtifactEmitter) -> None:
        """Register an emitter; a later registration replaces the same name."""
        self._emitters[emitter.name] = emitter

    def select(self, target: str) -> ArtifactEmitter:
        emitter = self._emitters.get(target)
        if emitter is None:
            raise ConfigError(f"Unknown target '{target}'; expected one of {self.names()}.")
        return emitter

    def names(self) -> tuple[str, ...]:
        """Return registered target names in registration order."""
        return tuple(self._emitters.keys())
