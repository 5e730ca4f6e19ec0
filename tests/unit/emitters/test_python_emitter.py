from __future__ import annotations

import ast

import pytest

from asset_embed.bundle import ByteRange, EncodedLiteral, compress_bytes, encode_literal
from asset_embed.emitters import GENERATED_BANNER, EmitRequest, PythonEmitter
from asset_embed.errors import ConfigError


def _packed_request(**overrides: object) -> EmitRequest:
    values: dict[str, object] = {
        "package": "webui.assets",
        "packing": "packed",
        "encoding": "base64",
        "packed": encode_literal(compress_bytes(b"hihello"), "base64", width=8),
        "ranges": (ByteRange("a.txt", 0, 2), ByteRange("b.txt", 2, 7)),
    }
    values.update(overrides)
    return EmitRequest(**values)  # type: ignore[arg-type]


def test_packed_module_is_valid_python_with_expected_declarations() -> None:
    text = PythonEmitter().render(_packed_request())

    tree = ast.parse(text)
    assigned = {
        target.id
        for node in tree.body
        if isinstance(node, (ast.Assign, ast.AnnAssign))
        for target in (node.targets if isinstance(node, ast.Assign) else [node.target])
        if isinstance(target, ast.Name)
    }
    functions = {node.name for node in tree.body if isinstance(node, ast.FunctionDef)}

    assert text.startswith(f"# {GENERATED_BANNER}\n")
    assert '"""Embedded assets for webui.assets.' in text
    assert {"_PACKAGE", "_ENCODING", "_PACKED", "_RANGES"} <= assigned
    assert "_BLOBS" not in assigned
    assert {"asset_names", "get", "must_get", "_load", "_build"} <= functions
    assert "    ('a.txt', 0, 2),\n    ('b.txt', 2, 7),\n" in text


def test_wrapped_literal_renders_as_parenthesized_concatenation() -> None:
    text = PythonEmitter().render(_packed_request())

    assert "_PACKED = (\n    \"" in text


def test_hex_literal_renders_as_bytes() -> None:
    literal = EncodedLiteral(scheme="hex", chunks=("\\x1f\\x8b",))
    text = PythonEmitter().render(_packed_request(encoding="hex", packed=literal))

    assert '_PACKED = b"\\x1f\\x8b"\n' in text


def test_per_file_module_lists_blobs_in_request_order() -> None:
    request = EmitRequest(
        package="main",
        packing="per-file",
        encoding="base64",
        blobs=(
            ("z.txt", EncodedLiteral(scheme="base64", chunks=("AAAA",))),
            ("a.txt", EncodedLiteral(scheme="base64", chunks=("BBBB", "CC=="))),
        ),
    )

    text = PythonEmitter().render(request)
    ast.parse(text)

    assert text.index("'z.txt'") < text.index("'a.txt'")
    assert '        "AAAA",\n' in text
    assert '        (\n            "BBBB"\n            "CC=="\n        ),\n' in text
    assert "_RANGES" not in text


def test_paths_with_quotes_are_escaped() -> None:
    request = _packed_request(ranges=(ByteRange("it's \"q\".txt", 0, 7),))

    text = PythonEmitter().render(request)
    tree = ast.parse(text)

    assert tree is not None
    assert repr("it's \"q\".txt") in text


def test_rendering_is_deterministic() -> None:
    assert PythonEmitter().render(_packed_request()) == PythonEmitter().render(_packed_request())


@pytest.mark.parametrize("package", ["", "1abc", "web-ui", "a..b", 'x"""'])
def test_invalid_package_raises_config_error(package: str) -> None:
    with pytest.raises(ConfigError, match="Invalid Python module path"):
        PythonEmitter().render(_packed_request(package=package))


def test_packed_request_without_literal_is_rejected() -> None:
    with pytest.raises(ConfigError, match="require a packed literal"):
        PythonEmitter().render(_packed_request(packed=None))
