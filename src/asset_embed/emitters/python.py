"""Python module emitter."""

from __future__ import annotations

import re

from asset_embed.bundle.literal import SCHEME_HEX
from asset_embed.bundle.models import EncodedLiteral
from asset_embed.emitters.base import (
    GENERATED_BANNER,
    PACKING_PACKED,
    EmitRequest,
    require_identifier,
    validate_request,
)

_MODULE_PATH = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")
_INDENT = "    "

_PREAMBLE = '''# {banner}
"""Embedded assets for {package}.

Read bundled files with asset_names(), get(name) and must_get(name).
"""

from __future__ import annotations

import base64
import gzip
import threading
from types import MappingProxyType

__all__ = ["AssetNotFoundError", "asset_names", "get", "must_get"]

'''

_BUILD_PACKED = '''

def _build() -> dict[str, bytes]:
    global _PACKED
    buffer = _inflate(_PACKED)
    _PACKED = None
    return {name: buffer[start:end] for name, start, end in _RANGES}
'''

_BUILD_PER_FILE = '''

def _build() -> dict[str, bytes]:
    global _BLOBS
    assets = {name: _inflate(literal) for name, literal in _BLOBS}
    _BLOBS = ()
    return assets
'''

_EPILOGUE = '''

class AssetNotFoundError(KeyError):
    """Raised by must_get() when no asset has the requested name."""


_lock = threading.Lock()
_assets: MappingProxyType[str, bytes] | None = None


def _decode(literal: str | bytes) -> bytes:
    if isinstance(literal, bytes):
        return literal
    return base64.b64decode(literal)


def _inflate(literal: str | bytes) -> bytes:
    return gzip.decompress(_decode(literal))
{build}

def _load() -> MappingProxyType[str, bytes]:
    global _assets
    assets = _assets
    if assets is not None:
        return assets
    with _lock:
        if _assets is None:
            _assets = MappingProxyType(_build())
        return _assets


def asset_names() -> list[str]:
    """Return every bundled asset name in ascending order."""
    return sorted(_load())


def get(name: str) -> tuple[bytes | None, bool]:
    """Return (data, True) for a bundled asset, else (None, False)."""
    assets = _load()
    if name in assets:
        return assets[name], True
    return None, False


def must_get(name: str) -> bytes:
    """Return a bundled asset or raise AssetNotFoundError."""
    assets = _load()
    if name not in assets:
        raise AssetNotFoundError(f"could not find asset: {{name}}")
    return assets[name]
'''


def _quote_chunk(chunk: str, scheme: str) -> str:
    if scheme == SCHEME_HEX:
        return f'b"{chunk}"'
    return f'"{chunk}"'


def render_literal(literal: EncodedLiteral, indent: str) -> list[str]:
    """Render a literal as one line, or a parenthesized implicit concatenation."""
    quoted = [_quote_chunk(chunk, literal.scheme) for chunk in literal.chunks]
    if len(quoted) == 1:
        return [quoted[0]]
    lines = ["("]
    lines.extend(f"{indent}{_INDENT}{item}" for item in quoted)
    lines.append(f"{indent})")
    return lines


def _assign(name: str, literal: EncodedLiteral) -> list[str]:
    rendered = render_literal(literal, indent="")
    return [f"{name} = {rendered[0]}", *rendered[1:]]


class PythonEmitter:
    """Render a self-contained Python module exposing the lookup API."""

    name = "python"
    default_extension = ".py"

    def render(self, request: EmitRequest) -> str:
        validate_request(request)
        package = require_identifier(request.package, _MODULE_PATH, "Python module path")
        lines = [f"_PACKAGE = {package!r}", f"_ENCODING = {request.encoding!r}"]
        if request.packing == PACKING_PACKED:
            assert request.packed is not None
            lines.extend(_assign("_PACKED", request.packed))
            lines.append("_RANGES: tuple[tuple[str, int, int], ...] = (")
            lines.extend(
                f"{_INDENT}({item.path!r}, {item.start}, {item.end})," for item in request.ranges
            )
            lines.append(")")
            build = _BUILD_PACKED
        else:
            lines.append("_BLOBS: tuple[tuple[str, str | bytes], ...] = (")
            for path, literal in request.blobs:
                lines.append(f"{_INDENT}(")
                lines.append(f"{_INDENT * 2}{path!r},")
                rendered = render_literal(literal, indent=_INDENT * 2)
                lines.append(f"{_INDENT * 2}{rendered[0]}")
                lines.extend(rendered[1:])
                lines[-1] += ","
                lines.append(f"{_INDENT}),")
            lines.append(")")
            build = _BUILD_PER_FILE
        declarations = "\n".join(lines) + "\n"
        preamble = _PREAMBLE.format(banner=GENERATED_BANNER, package=package)
        return preamble + declarations + _EPILOGUE.format(build=build)
