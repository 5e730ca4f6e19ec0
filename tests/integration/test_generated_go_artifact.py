from __future__ import annotations

import base64
import gzip
import os
import re
import shutil
import subprocess
from pathlib import Path

import pytest

from asset_embed.config import CliOverrides, GeneratorConfig, load_effective_config
from asset_embed.pipeline import generate, write_artifact

_GO_MOD = "module example.com/assets\n\ngo 1.20\n"

_GO_TEST = """package assets

import (
	"bytes"
	"reflect"
	"testing"
)

func TestLookup(t *testing.T) {
	if names := AssetNames(); !reflect.DeepEqual(names, []string{"a.txt", "b.txt", "c.txt"}) {
		t.Fatalf("AssetNames() = %q", names)
	}
	if d, ok := Get("b.txt"); !ok || len(d) != 0 {
		t.Fatalf("Get(b.txt) = %q, %v", d, ok)
	}
	if d := MustGet("c.txt"); !bytes.Equal(d, []byte("hello world")) {
		t.Fatalf("MustGet(c.txt) = %q", d)
	}
	if d, ok := Get("missing.txt"); ok || d != nil {
		t.Fatalf("Get(missing.txt) = %q, %v", d, ok)
	}
	defer func() {
		if recover() == nil {
			t.Fatal("MustGet(missing.txt) did not panic")
		}
	}()
	MustGet("missing.txt")
}
"""


def _go_config(tmp_path: Path, **overrides: object) -> GeneratorConfig:
    return load_effective_config(
        CliOverrides(patterns=("*.txt",), target="go", **overrides),  # type: ignore[arg-type]
        search_dir=tmp_path,
    )


def test_packed_go_artifact_embeds_reversible_data(sample_assets: Path) -> None:
    result = generate(_go_config(sample_assets, package="assets"))
    text = result.artifact

    assert result.output_path == Path("assets.go")
    assert "package assets\n" in text
    assert '\t{"a.txt", 0, 2},\n\t{"b.txt", 2, 2},\n\t{"c.txt", 2, 13},\n' in text
    data_block = text.split("var assetData = ", 1)[1].split("\n\n", 1)[0]
    encoded = "".join(re.findall(r'"([^"]*)"', data_block))
    assert gzip.decompress(base64.b64decode(encoded)) == b"hihello world"


def test_per_file_go_artifact_matches_original_layout(sample_assets: Path) -> None:
    result = generate(_go_config(sample_assets, packing="per-file", line_width=0))
    entries = re.findall(r'\t\{"([^"]+)", "([^"]*)"\},', result.artifact)

    assert [name for name, _ in entries] == ["a.txt", "b.txt", "c.txt"]
    assert [gzip.decompress(base64.b64decode(blob)) for _, blob in entries] == [
        b"hi",
        b"",
        b"hello world",
    ]


def test_go_generation_is_deterministic(sample_assets: Path) -> None:
    config = _go_config(sample_assets, encoding="hex")

    assert generate(config).artifact == generate(config).artifact


@pytest.mark.skipif(shutil.which("go") is None, reason="go toolchain not installed")
@pytest.mark.parametrize("packing", ["packed", "per-file"])
@pytest.mark.parametrize("encoding", ["base64", "hex"])
def test_go_artifact_compiles_and_serves_assets(
    sample_assets: Path, packing: str, encoding: str
) -> None:
    module_dir = sample_assets / "gomod"
    config = _go_config(
        sample_assets,
        package="assets",
        packing=packing,
        encoding=encoding,
        output=module_dir / "assets.go",
    )
    result = generate(config)
    write_artifact(result.output_path, result.artifact)
    (module_dir / "go.mod").write_text(_GO_MOD, encoding="utf-8")
    (module_dir / "assets_test.go").write_text(_GO_TEST, encoding="utf-8")
    env = {
        **os.environ,
        "GOCACHE": str(sample_assets / ".gocache"),
        "GOFLAGS": "-mod=mod",
        "GOPATH": str(sample_assets / ".gopath"),
        "GOTOOLCHAIN": "local",
    }

    completed = subprocess.run(
        ["go", "test", "./..."],
        cwd=module_dir,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stdout + completed.stderr
