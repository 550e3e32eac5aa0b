"""Shared pytest fixtures for UPM Guard tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def write_json(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def make_package(
    parent: Path,
    name: str,
    *,
    dir_name: str | None = None,
    dependencies: dict[str, str] | None = None,
    asmdefs: dict[str, dict] | None = None,
) -> Path:
    """Create ``parent/<dir_name or name>/package.json`` plus optional asmdef files."""
    root = parent / (dir_name or name)
    manifest: dict = {"name": name, "version": "1.0.0"}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    write_json(root / "package.json", manifest)
    for rel, content in (asmdefs or {}).items():
        write_json(root / rel, content)
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty Unity project with Packages/ and Library/PackageCache/."""
    (tmp_path / "Packages").mkdir()
    (tmp_path / "Library" / "PackageCache").mkdir(parents=True)
    return tmp_path
