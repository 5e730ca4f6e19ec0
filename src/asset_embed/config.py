"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from asset_embed.bundle.literal import DEFAULT_LINE_WIDTH, SCHEME_BASE64, SCHEMES
from asset_embed.bundle.ordering import ORDER_BY_NAME, ORDER_POLICIES
from asset_embed.emitters.base import PACKING_PACKED, PACKINGS
from asset_embed.errors import ConfigError

CONFIG_FILE_NAME = "asset_embed.toml"
DEFAULT_PACKAGE = "main"
DEFAULT_TARGET = "python"
DEFAULT_OUTPUT_STEM = "assets"
MAX_LINE_WIDTH = 4096


@dataclass(slots=True, frozen=True)
class BundleConfig:
    """Input selection and packing settings."""

    patterns: tuple[str, ...]
    order: str
    packing: str


@dataclass(slots=True, frozen=True)
class OutputConfig:
    """Artifact rendering settings."""

    package: str
    path: Path | None
    target: str
    encoding: str
    line_width: int


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    """Audit log destination; None disables it."""

    audit_log: Path | None


@dataclass(slots=True, frozen=True)
class GeneratorConfig:
    """Fully merged generator configuration."""

    bundle: BundleConfig
    output: OutputConfig
    logging: LoggingConfig

    def output_path(self, default_extension: str) -> Path:
        """Return the configured output path or `assets<ext>` in the cwd."""
        if self.output.path is not None:
            return self.output.path
        return Path(f"{DEFAULT_OUTPUT_STEM}{default_extension}")

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for audit metadata."""
        return {
            "bundle": {
                "patterns": list(self.bundle.patterns),
                "order": self.bundle.order,
                "packing": self.bundle.packing,
            },
            "output": {
                "package": self.output.package,
                "path": str(self.output.path) if self.output.path is not None else None,
                "target": self.output.target,
                "encoding": self.output.encoding,
                "line_width": self.output.line_width,
            },
            "logging": {
                "audit_log": (
                    str(self.logging.audit_log) if self.logging.audit_log is not None else None
                ),
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional command-line overrides applied at highest precedence."""

    patterns: tuple[str, ...] = ()
    package: str | None = None
    output: Path | None = None
    target: str | None = None
    packing: str | None = None
    encoding: str | None = None
    order: str | None = None
    line_width: int | None = None
    audit_log: Path | None = None


def default_config() -> GeneratorConfig:
    """Build default config with no input patterns."""
    return GeneratorConfig(
        bundle=BundleConfig(patterns=(), order=ORDER_BY_NAME, packing=PACKING_PACKED),
        output=OutputConfig(
            package=DEFAULT_PACKAGE,
            path=None,
            target=DEFAULT_TARGET,
            encoding=SCHEME_BASE64,
            line_width=DEFAULT_LINE_WIDTH,
        ),
        logging=LoggingConfig(audit_log=None),
    )


def load_config_file(path: Path, *, required: bool = False) -> dict[str, object]:
    """Load an optional TOML config file."""
    if not path.exists():
        if required:
            raise ConfigError(f"Config file '{path}' does not exist.")
        return {}
    try:
        with path.open("rb") as handle:
            payload = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Config file '{path}' is not valid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Config file '{path}' cannot be read: {exc.strerror}") from exc
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(f"Config field '{name}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"Config field '{name}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_choice(value: object, name: str, default: str, choices: tuple[str, ...]) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value not in choices:
        raise ConfigError(f"Config field '{name}' must be one of {', '.join(choices)}.")
    return value


def _optional_string(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config field '{name}' must be a non-empty string.")
    return value


def _optional_path(value: object, name: str, default: Path | None) -> Path | None:
    if value is None:
        return default
    if isinstance(value, Path):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config field '{name}' must be a non-empty path string.")
    return Path(value)


def _optional_width(value: object, name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"Config field '{name}' must be a non-negative integer.")
    if value > MAX_LINE_WIDTH:
        raise ConfigError(f"Config field '{name}' must be <= {MAX_LINE_WIDTH}.")
    return value


def merge_config(
    base: GeneratorConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> GeneratorConfig:
    """Merge defaults, config file, then CLI overrides."""
    bundle_payload = _get_table(file_payload, "bundle")
    output_payload = _get_table(file_payload, "output")
    logging_payload = _get_table(file_payload, "logging")

    patterns = base.bundle.patterns
    if "patterns" in bundle_payload:
        patterns = _tuple_of_strings(bundle_payload["patterns"], "bundle.patterns")

    merged = GeneratorConfig(
        bundle=BundleConfig(
            patterns=patterns,
            order=_optional_choice(
                bundle_payload.get("order"), "bundle.order", base.bundle.order, ORDER_POLICIES
            ),
            packing=_optional_choice(
                bundle_payload.get("packing"), "bundle.packing", base.bundle.packing, PACKINGS
            ),
        ),
        output=OutputConfig(
            package=_optional_string(
                output_payload.get("package"), "output.package", base.output.package
            ),
            path=_optional_path(output_payload.get("path"), "output.path", base.output.path),
            target=_optional_string(
                output_payload.get("target"), "output.target", base.output.target
            ),
            encoding=_optional_choice(
                output_payload.get("encoding"), "output.encoding", base.output.encoding, SCHEMES
            ),
            line_width=_optional_width(
                output_payload.get("line_width"), "output.line_width", base.output.line_width
            ),
        ),
        logging=LoggingConfig(
            audit_log=_optional_path(
                logging_payload.get("audit_log"), "logging.audit_log", base.logging.audit_log
            ),
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: GeneratorConfig, overrides: CliOverrides) -> GeneratorConfig:
    """Apply command-line overrides at highest precedence."""
    bundle = BundleConfig(
        patterns=overrides.patterns or config.bundle.patterns,
        order=_optional_choice(overrides.order, "--order", config.bundle.order, ORDER_POLICIES),
        packing=_optional_choice(
            overrides.packing, "--packing", config.bundle.packing, PACKINGS
        ),
    )
    output = OutputConfig(
        package=_optional_string(overrides.package, "--pkg", config.output.package),
        path=_optional_path(overrides.output, "--out", config.output.path),
        target=_optional_string(overrides.target, "--target", config.output.target),
        encoding=_optional_choice(
            overrides.encoding, "--encoding", config.output.encoding, SCHEMES
        ),
        line_width=_optional_width(overrides.line_width, "--line-width", config.output.line_width),
    )
    logging = LoggingConfig(
        audit_log=_optional_path(overrides.audit_log, "--audit-log", config.logging.audit_log)
    )
    return GeneratorConfig(bundle=bundle, output=output, logging=logging)


def load_effective_config(
    overrides: CliOverrides | None = None,
    *,
    config_path: Path | None = None,
    search_dir: Path | None = None,
) -> GeneratorConfig:
    """Load effective config using merge order defaults -> config file -> overrides.

    An explicit `config_path` must exist; otherwise `asset_embed.toml` in
    `search_dir` (the working directory by default) is used when present.
    """
    if config_path is not None:
        payload = load_config_file(config_path, required=True)
    else:
        payload = load_config_file((search_dir or Path.cwd()) / CONFIG_FILE_NAME)
    return merge_config(default_config(), payload, overrides or CliOverrides())
