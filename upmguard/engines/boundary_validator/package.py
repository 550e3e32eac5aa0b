"""Load the target package's identity and declared dependencies."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from upmguard.engines.boundary_validator.models import PackageInfo
from upmguard.engines.boundary_validator.rules import package_root
from upmguard.engines.package_index import MANIFEST_NAME
from upmguard.exceptions import (
    ConfigurationError,
    ParseError,
    UnknownError,
    UpmGuardError,
    VisibilityMismatch,
)
from upmguard.manifest import read_document, read_object_field, read_string_field


def parse_package_manifest(text: str) -> tuple[str, list[str]]:
    """Return ``(name, declared dependency ids)`` from package.json text."""
    name = read_string_field(text, "name")
    if not name:
        raise ParseError("Found package.json but could not read field: name", field="name")
    return name, list(read_object_field(text, "dependencies"))


def load_package_info(
    package_dir: Path,
    is_visible: Callable[[str], bool] | None = None,
) -> PackageInfo:
    """Read ``package.json`` under *package_dir* and check the host sees the package.

    *is_visible* receives the host path ``Packages/<name>/package.json``; when
    omitted the visibility check is skipped.
    """
    try:
        if not str(package_dir).strip() or not package_dir.is_dir():
            raise ConfigurationError(f"Invalid folder path: {package_dir}")

        manifest = package_dir / MANIFEST_NAME
        if not manifest.is_file():
            raise ConfigurationError(f"Selected folder does not contain {MANIFEST_NAME}: {package_dir}")

        name, deps = parse_package_manifest(read_document(manifest))
        info = PackageInfo(name=name, declared_dependencies=deps, root=package_root(name))

        expected = info.root + MANIFEST_NAME
        if is_visible is not None and not is_visible(expected):
            raise VisibilityMismatch(
                "Package name read from package.json, but Unity does not see this package installed.\n"
                f"Expected to find: {expected}\n"
                "Make sure the project manifest.json references this local package "
                "and Unity has imported it.",
                expected=expected,
            )
        return info
    except UpmGuardError:
        raise
    except Exception as exc:
        raise UnknownError(f"Failed to load package: {exc}") from exc
