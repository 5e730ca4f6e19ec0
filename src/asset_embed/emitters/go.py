"""Go source emitter."""

from __future__ import annotations

import re

from asset_embed.bundle.literal import SCHEME_BASE64
from asset_embed.bundle.models import EncodedLiteral
from asset_embed.emitters.base import (
    GENERATED_BANNER,
    PACKING_PACKED,
    EmitRequest,
    require_identifier,
    validate_request,
)

_PACKAGE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_IMPORTS_BASE = ("bytes", "compress/gzip", "errors", "io", "sort", "sync")

_DECODE_BASE64 = """
func decode(s string) []byte {
	b, err := base64.StdEncoding.DecodeString(s)
	if err != nil {
		panic(err)
	}
	return b
}
"""

_DECODE_HEX = """
func decode(s string) []byte {
	return []byte(s)
}
"""

_BUILD_PACKED = """
type assetRange struct {
	name       string
	start, end int
}

func buildAssets() map[string][]byte {
	buf := decompress(assetData)
	assetData = ""
	m := make(map[string][]byte, len(assetRanges))
	for _, r := range assetRanges {
		m[r.name] = buf[r.start:r.end:r.end]
	}
	assetRanges = nil
	return m
}
"""

_BUILD_PER_FILE = """
type assetBlob struct {
	name, data string
}

func buildAssets() map[string][]byte {
	m := make(map[string][]byte, len(assetBlobs))
	for _, b := range assetBlobs {
		m[b.name] = decompress(b.data)
	}
	assetBlobs = nil
	return m
}
"""

_RUNTIME = """
var (
	assetsOnce sync.Once
	assets     map[string][]byte
)

func load() {
	assetsOnce.Do(func() {
		assets = buildAssets()
	})
}

// AssetNames returns a list of all assets
func AssetNames() []string {
	load()
	an := make([]string, 0, len(assets))
	for k := range assets {
		an = append(an, k)
	}
	sort.Strings(an)
	return an
}

// Get returns an asset by name
func Get(an string) ([]byte, bool) {
	load()
	if d, ok := assets[an]; ok {
		return d, true
	}
	return nil, false
}

// MustGet returns an asset by name or explodes
func MustGet(an string) []byte {
	if r, ok := Get(an); ok {
		return r
	}
	panic(errors.New("could not find asset: " + an))
}

func decompress(s string) []byte {
	r, err := gzip.NewReader(bytes.NewReader(decode(s)))
	if err != nil {
		panic(err)
	}
	defer r.Close()
	var buf bytes.Buffer
	if _, err := io.Copy(&buf, r); err != nil {
		panic(err)
	}
	return buf.Bytes()
}
"""


def go_quote(value: str) -> str:
    """Quote a path as a Go interpreted string literal over its raw bytes.

    Printable ASCII passes through; every other byte becomes `\\xNN`, so
    names that are not valid UTF-8 keep their exact bytes.
    """
    out = []
    for byte in value.encode("utf-8", "surrogateescape"):
        char = chr(byte)
        if char in '"\\':
            out.append("\\" + char)
        elif 0x20 <= byte < 0x7F:
            out.append(char)
        else:
            out.append(f"\\x{byte:02x}")
    return '"' + "".join(out) + '"'


def render_literal(literal: EncodedLiteral, indent: str) -> str:
    """Render chunks joined with `+`, continuing on indented lines."""
    quoted = [f'"{chunk}"' for chunk in literal.chunks]
    return f" +\n{indent}".join(quoted)


class GoEmitter:
    """Render a Go source file exposing AssetNames, Get and MustGet."""

    name = "go"
    default_extension = ".go"

    def render(self, request: EmitRequest) -> str:
        validate_request(request)
        package = require_identifier(request.package, _PACKAGE_NAME, "Go package name")
        imports = list(_IMPORTS_BASE)
        if request.encoding == SCHEME_BASE64:
            imports.append("encoding/base64")
        parts = [
            f"// {GENERATED_BANNER}\n",
            f"\npackage {package}\n",
            "\nimport (\n",
            "".join(f'\t"{item}"\n' for item in sorted(imports)),
            ")\n",
        ]
        if request.packing == PACKING_PACKED:
            assert request.packed is not None
            parts.append("\nvar assetRanges = []assetRange{\n")
            parts.extend(
                f"\t{{{go_quote(item.path)}, {item.start}, {item.end}}},\n"
                for item in request.ranges
            )
            parts.append("}\n")
            data = render_literal(request.packed, indent="\t")
            parts.append(f"\nvar assetData = {data}\n")
            parts.append(_BUILD_PACKED)
        else:
            parts.append("\nvar assetBlobs = []assetBlob{\n")
            for path, literal in request.blobs:
                rendered = render_literal(literal, indent="\t\t")
                parts.append(f"\t{{{go_quote(path)}, {rendered}}},\n")
            parts.append("}\n")
            parts.append(_BUILD_PER_FILE)
        parts.append(_DECODE_BASE64 if request.encoding == SCHEME_BASE64 else _DECODE_HEX)
        parts.append(_RUNTIME)
        return "".join(parts)
