"""Error taxonomy for asset generation runs."""

from __future__ import annotations

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_EMPTY = 3
EXIT_FATAL = 255


class AssetEmbedError(Exception):
    """Base class for every failure that aborts a generation run."""

    code = "FATAL"
    exit_code = EXIT_FATAL

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ConfigError(AssetEmbedError, ValueError):
    """Raised when inputs or configuration fields are missing or invalid."""

    code = "CONFIG"
    exit_code = EXIT_USAGE


class PatternError(AssetEmbedError):
    """Raised when a glob pattern is syntactically invalid."""

    code = "BAD_PATTERN"

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"couldn't resolve pattern {pattern}: {reason}")
        self.pattern = pattern


class ReadError(AssetEmbedError):
    """Raised when a matched file cannot be opened or fully read."""

    code = "READ"

    def __init__(self, path: str, cause: OSError | None = None) -> None:
        detail = f": {cause.strerror}" if cause is not None and cause.strerror else ""
        super().__init__(f"couldn't read from {path}{detail}")
        self.path = path


class EmptyBundleError(AssetEmbedError):
    """Raised when patterns resolve to zero files."""

    code = "EMPTY_BUNDLE"
    exit_code = EXIT_EMPTY

    def __init__(self) -> None:
        super().__init__("No assets to bundle")


class CompressionError(AssetEmbedError):
    """Raised when the compressor fails or a round-trip check does not match."""

    code = "COMPRESSION"


class WriteError(AssetEmbedError):
    """Raised when the output directory or file cannot be written."""

    code = "WRITE"

    def __init__(self, path: str, cause: OSError | None = None) -> None:
        detail = f": {cause.strerror}" if cause is not None and cause.strerror else ""
        super().__init__(f"couldn't write to {path}{detail}")
        self.path = path
