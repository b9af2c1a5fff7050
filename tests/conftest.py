# tests/conftest.py

import json
from pathlib import Path

import pytest

from dolist.persistence import Store


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(store_path: Path) -> Store:
    """An initialised store backed by a fresh file in tmp_path."""
    s = Store(store_path)
    s.init()
    return s


@pytest.fixture()
def write_json(store_path: Path):
    def _write(data) -> Path:
        store_path.write_text(json.dumps(data), encoding="utf-8")
        return store_path

    return _write
