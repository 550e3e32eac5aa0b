"""Classification rules for dependency edges."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

from upmguard.engines.boundary_validator.models import IssueKind

PROJECT_LOCAL_PREFIX = "Assets/"
PACKAGES_PREFIX = "Packages/"
SIDECAR_SUFFIX = ".meta"

_REASON_TEXT: dict[IssueKind, str] = {
    IssueKind.NON_PORTABLE: (
        "Dependency path is neither Assets/ nor Packages/ (non-portable reference)."
    ),
    IssueKind.FORBIDDEN: (
        "Dependency is under Assets/. Your package would rely on project-local assets."
    ),
    IssueKind.UNDECLARED: (
        "Dependency is in Packages/ but NOT declared in this package's package.json dependencies."
    ),
}


def reason_text(kind: IssueKind) -> str:
    return _REASON_TEXT[kind]


def package_root(package_id: str) -> str:
    return f"{PACKAGES_PREFIX}{package_id}/"


def allowed_roots(self_root: str, declared: Iterable[str]) -> set[str]:
    """Self root plus one root per declared dependency, each ending in ``/``."""
    roots = {package_root(dep) for dep in declared if dep}
    if self_root:
        roots.add(self_root if self_root.endswith("/") else self_root + "/")
    return roots


def extract_package_root(asset: str) -> str:
    """``Packages/com.x/Sub/a.asset`` -> ``Packages/com.x/``; ``""`` if not under a package."""
    if not asset.startswith(PACKAGES_PREFIX):
        return ""
    rest = asset[len(PACKAGES_PREFIX) :]
    name, sep, _ = rest.partition("/")
    if not sep or not name:
        return ""
    return package_root(name)


def make_scan_filter(extensions: Iterable[str]):
    """Build a predicate accepting paths with a listed extension (case-insensitive)."""
    allowed = {ext.lower() for ext in extensions}

    def should_scan(path: str) -> bool:
        if path.lower().endswith(SIDECAR_SUFFIX):
            return False
        suffix = PurePosixPath(path).suffix.lower()
        return bool(suffix) and suffix in allowed

    return should_scan


def classify(dependency: str, roots: set[str]) -> tuple[IssueKind | None, str]:
    """Return ``(issue kind, suggested fix)``; kind is None for an allowed edge."""
    if not dependency.startswith((PROJECT_LOCAL_PREFIX, PACKAGES_PREFIX)):
        return IssueKind.NON_PORTABLE, "Move the dependency into the package, or remove the reference."

    if dependency.startswith(PROJECT_LOCAL_PREFIX):
        return IssueKind.FORBIDDEN, "Move the dependency into the package, or remove the reference."

    if any(dependency.startswith(root) for root in roots):
        return None, ""

    owner_root = extract_package_root(dependency)
    if not owner_root:
        return IssueKind.UNDECLARED, "Add this package to package.json dependencies, or remove the reference."
    package_id = owner_root[len(PACKAGES_PREFIX) :].rstrip("/")
    return IssueKind.UNDECLARED, f'If intentional, add to package.json dependencies: "{package_id}"'
