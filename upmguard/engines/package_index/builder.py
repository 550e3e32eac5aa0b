"""Build the module -> package index from installed package locations."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from upmguard.engines.package_index.models import ModuleIndex
from upmguard.manifest import read_document, read_string_field

log = structlog.get_logger("upmguard.engine")

MANIFEST_NAME = "package.json"
DESCRIPTOR_GLOB = "*.asmdef"


def default_install_locations(project_root: Path) -> list[Path]:
    """Embedded/local packages first, then the downloaded package cache."""
    return [project_root / "Packages", project_root / "Library" / "PackageCache"]


def iter_descriptors(root: Path) -> list[Path]:
    """All module descriptors beneath *root*, shallowest first, then by path."""
    hits = [p for p in root.rglob(DESCRIPTOR_GLOB) if p.is_file()]
    return sorted(hits, key=lambda p: (len(p.relative_to(root).parts), p.relative_to(root).as_posix()))


def _read_name(path: Path) -> str | None:
    try:
        return read_string_field(read_document(path), "name")
    except (OSError, UnicodeDecodeError):
        return None


def _scan_location(location: Path, index: ModuleIndex) -> None:
    if not location.is_dir():
        log.debug("index.location_missing", location=str(location))
        return

    # Only immediate subdirectories are packages; nested manifests are not searched.
    for package_dir in sorted(p for p in location.iterdir() if p.is_dir()):
        manifest = package_dir / MANIFEST_NAME
        if not manifest.is_file():
            continue

        package_id = _read_name(manifest)
        if not package_id:
            log.debug("index.package_skipped", path=str(manifest), reason="no name")
            continue

        for descriptor in iter_descriptors(package_dir):
            module_name = _read_name(descriptor)
            if not module_name:
                continue
            if not index.register(module_name, package_id):
                log.debug(
                    "index.duplicate_ignored",
                    module=module_name,
                    kept=index.get(module_name),
                    ignored=package_id,
                )


def build_index(install_locations: Iterable[Path]) -> ModuleIndex:
    """Scan *install_locations* in order and return the module index.

    Earlier locations take precedence: a module name already registered is
    never overwritten by a later package.
    """
    index = ModuleIndex()
    for location in install_locations:
        _scan_location(Path(location), index)
    log.info("index.built", modules=len(index))
    return index
