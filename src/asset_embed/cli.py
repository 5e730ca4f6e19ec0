"""Command-line entrypoint for the asset bundle generator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from asset_embed.bundle import ORDER_POLICIES, SCHEMES
from asset_embed.config import CliOverrides, load_effective_config
from asset_embed.emitters import PACKINGS, build_emitter_registry
from asset_embed.errors import (
    EXIT_FATAL,
    EXIT_OK,
    EXIT_USAGE,
    AssetEmbedError,
    EmptyBundleError,
)
from asset_embed.logging import JsonlAuditLogger
from asset_embed.pipeline import MISSING_PATTERNS_MESSAGE, run


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for one generation run."""
    parser = argparse.ArgumentParser(
        prog="asset-embed",
        usage="%(prog)s [options] <file patterns>",
        description="Bundle files matching glob patterns into a generated source module.",
    )
    parser.add_argument("patterns", nargs="*", metavar="pattern", help="Glob pattern of assets.")
    parser.add_argument("--pkg", default=None, help="Package name for generated code.")
    parser.add_argument(
        "--out", default=None, help="Output file to be generated. Default: assets.<ext>"
    )
    parser.add_argument(
        "--target",
        choices=build_emitter_registry().names(),
        default=None,
        help="Language of the generated artifact. Default: python",
    )
    parser.add_argument("--packing", choices=PACKINGS, default=None)
    parser.add_argument("--encoding", choices=SCHEMES, default=None)
    parser.add_argument("--order", choices=ORDER_POLICIES, default=None)
    parser.add_argument("--line-width", type=int, default=None)
    parser.add_argument(
        "--config", default=None, help="TOML config file. Default: ./asset_embed.toml if present."
    )
    parser.add_argument("--audit-log", default=None, help="Append a JSONL record of each run.")
    return parser


def _fail_with_usage(
    parser: argparse.ArgumentParser, message: str, exit_code: int, stderr: TextIO
) -> int:
    stderr.write(f"{message}\n\n")
    parser.print_help(stderr)
    return exit_code


def _describe(exc: AssetEmbedError) -> str:
    return "\n".join([exc.reason, *getattr(exc, "__notes__", ())])


def main(argv: list[str] | None = None, *, stderr: TextIO | None = None) -> int:
    """Entrypoint for one generation run; returns the process exit code."""
    err = stderr if stderr is not None else sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        overrides = CliOverrides(
            patterns=tuple(args.patterns),
            package=args.pkg,
            output=Path(args.out) if args.out is not None else None,
            target=args.target,
            packing=args.packing,
            encoding=args.encoding,
            order=args.order,
            line_width=args.line_width,
            audit_log=Path(args.audit_log) if args.audit_log is not None else None,
        )
        config = load_effective_config(
            overrides,
            config_path=Path(args.config) if args.config is not None else None,
        )
        if not config.bundle.patterns:
            return _fail_with_usage(parser, MISSING_PATTERNS_MESSAGE, EXIT_USAGE, err)
        audit_logger = (
            JsonlAuditLogger(config.logging.audit_log)
            if config.logging.audit_log is not None
            else None
        )
        run(config, audit_logger=audit_logger)
    except EmptyBundleError as exc:
        return _fail_with_usage(parser, _describe(exc), exc.exit_code, err)
    except AssetEmbedError as exc:
        err.write(f"{parser.prog}: {_describe(exc)}\n")
        return exc.exit_code
    except Exception as exc:
        err.write(f"{parser.prog}: unexpected error: {type(exc).__name__}: {exc}\n")
        return EXIT_FATAL
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
