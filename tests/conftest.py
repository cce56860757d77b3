"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def make_tree():
    """Write {relative path: str or bytes} under root; a trailing "/" makes an empty dir."""

    def _make(root: Path, files: dict) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            if rel.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def read_tree():
    """Snapshot of every file under root as {posix relative path: bytes}."""

    def _read(root: Path) -> dict:
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _read
