"""Authoritative version source: the host project's package manifest."""

from __future__ import annotations

from pathlib import Path

from upmguard.manifest import read_document, read_object_field

PROJECT_MANIFEST = Path("Packages") / "manifest.json"


def read_project_versions(project_root: Path) -> dict[str, str]:
    """Package id -> version from ``Packages/manifest.json``; empty if unavailable."""
    path = project_root / PROJECT_MANIFEST
    if not path.is_file():
        return {}
    return read_object_field(read_document(path), "dependencies")
