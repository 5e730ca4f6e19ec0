from __future__ import annotations

import importlib.util
import itertools
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pytest

_module_ids = itertools.count()


def _load_module(path: Path) -> ModuleType:
    name = f"_generated_assets_{next(_module_ids)}"
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def load_artifact() -> Callable[[Path], ModuleType]:
    """Import a generated Python artifact from disk without touching sys.modules."""
    return _load_module


@pytest.fixture
def sample_assets(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a.txt, b.txt (empty) and c.txt in a working directory."""
    (tmp_path / "c.txt").write_bytes(b"hello world")
    (tmp_path / "a.txt").write_bytes(b"hi")
    (tmp_path / "b.txt").write_bytes(b"")
    monkeypatch.chdir(tmp_path)
    return tmp_path
