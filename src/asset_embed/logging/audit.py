"""Structured JSONL audit log for generation runs."""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from asset_embed.errors import AssetEmbedError, WriteError


@dataclass(slots=True, frozen=True)
class GenerationEvent:
    """Outcome of a single generation run."""

    timestamp: str
    run_id: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]

    @classmethod
    def succeeded(cls, run_id: str, metadata: dict[str, object]) -> GenerationEvent:
        return cls(
            timestamp=utc_timestamp(), run_id=run_id, ok=True, error_code=None, metadata=metadata
        )

    @classmethod
    def failed(
        cls, run_id: str, error: AssetEmbedError, metadata: dict[str, object]
    ) -> GenerationEvent:
        return cls(
            timestamp=utc_timestamp(),
            run_id=run_id,
            ok=False,
            error_code=error.code,
            metadata={**metadata, "message": error.reason},
        )


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


class JsonlAuditLogger:
    """Append one JSON line per generation run."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: GenerationEvent) -> None:
        """Append `event`; any filesystem failure surfaces as `WriteError`."""
        line = json.dumps(asdict(event), sort_keys=True) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as exc:
            raise WriteError(str(self._path), exc) from exc
