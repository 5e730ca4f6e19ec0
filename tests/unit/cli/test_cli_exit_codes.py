from __future__ import annotations

import io
from pathlib import Path

import pytest

from asset_embed import pipeline
from asset_embed.cli import main
from asset_embed.errors import EXIT_EMPTY, EXIT_FATAL, EXIT_OK, EXIT_USAGE


def test_missing_patterns_prints_usage_and_exits_1(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    stderr = io.StringIO()

    code = main([], stderr=stderr)

    assert code == EXIT_USAGE
    assert stderr.getvalue().startswith("Missing <file pattern>\n\n")
    assert "usage: asset-embed [options] <file patterns>" in stderr.getvalue()
    assert not (tmp_path / "assets.py").exists()


def test_no_matches_prints_usage_and_exits_3(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    stderr = io.StringIO()

    code = main(["*.nothing"], stderr=stderr)

    assert code == EXIT_EMPTY
    assert stderr.getvalue().startswith("No assets to bundle\n\n")
    assert not (tmp_path / "assets.py").exists()


def test_bad_pattern_is_fatal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    stderr = io.StringIO()

    code = main(["assets/[a-z"], stderr=stderr)

    assert code == EXIT_FATAL
    assert stderr.getvalue() == (
        "asset-embed: couldn't resolve pattern assets/[a-z: unterminated character class\n"
    )


def test_write_failure_is_fatal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")
    (tmp_path / "blocker").write_bytes(b"not a directory")
    stderr = io.StringIO()

    code = main(["--out", "blocker/assets.py", "a.txt"], stderr=stderr)

    assert code == EXIT_FATAL
    assert "couldn't write to" in stderr.getvalue()


def test_unexpected_fault_is_reported_as_fatal(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")

    def _explode(*args: object, **kwargs: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(pipeline, "write_artifact", _explode)
    stderr = io.StringIO()

    code = main(["a.txt"], stderr=stderr)

    assert code == EXIT_FATAL
    assert stderr.getvalue() == "asset-embed: unexpected error: RuntimeError: boom\n"


def test_invalid_config_value_exits_1(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    stderr = io.StringIO()

    code = main(["--line-width", "-3", "*.txt"], stderr=stderr)

    assert code == EXIT_USAGE
    assert "--line-width" in stderr.getvalue()


def test_success_writes_default_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")
    stderr = io.StringIO()

    code = main(["--pkg", "bundle", "a.txt"], stderr=stderr)

    assert code == EXIT_OK
    assert stderr.getvalue() == ""
    assert "Embedded assets for bundle." in (tmp_path / "assets.py").read_text(encoding="utf-8")


def test_go_target_defaults_to_go_extension(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")

    code = main(["--target", "go", "a.txt"], stderr=io.StringIO())

    assert code == EXIT_OK
    assert (tmp_path / "assets.go").read_text(encoding="utf-8").count("package main") == 1
