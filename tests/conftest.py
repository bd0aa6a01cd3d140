from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

# Worker tests create Qt objects; never open a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _make_tree(root: Path, layout: dict) -> Path:
    """Create files and folders from a nested dict; None values are empty folders."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        path = root / name
        if isinstance(content, dict):
            _make_tree(path, content)
        elif content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree():
    return _make_tree


@pytest.fixture
def log_lines() -> list[str]:
    return []


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    return tmp_path / "destination"
