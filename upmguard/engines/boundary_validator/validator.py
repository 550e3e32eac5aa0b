"""Walk the dependency closure of every scannable asset in a package."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import structlog

from upmguard.engines.boundary_validator.models import Issue, ValidationResult
from upmguard.engines.boundary_validator.rules import allowed_roots, classify
from upmguard.exceptions import ConfigurationError

log = structlog.get_logger("upmguard.engine")

AssetEnumerator = Callable[[str], Iterable[str]]
ClosureProvider = Callable[[str], Sequence[str]]
ScanFilter = Callable[[str], bool]


def collect_scannable(root: str, enumerate_assets: AssetEnumerator, scan_filter: ScanFilter) -> list[str]:
    """Distinct assets under *root* that pass *scan_filter*, in enumeration order."""
    seen: set[str] = set()
    assets: list[str] = []
    for path in enumerate_assets(root):
        if path in seen or not path.startswith(root) or not scan_filter(path):
            continue
        seen.add(path)
        assets.append(path)
    return assets


def validate(
    target_root: str,
    declared_dependencies: Iterable[str],
    enumerate_assets: AssetEnumerator,
    closure: ClosureProvider,
    scan_filter: ScanFilter,
) -> ValidationResult:
    """Classify every cross-package edge reachable from the package's assets.

    *closure* must already be transitive. Issues are de-duplicated by
    ``(owner, dependency, reason)`` and kept in first-seen order; every
    dependency visited counts toward ``scanned_dependency_count``.

    Raises :class:`ConfigurationError` when the allow-list is empty.
    """
    roots = allowed_roots(target_root, declared_dependencies)
    if not roots or not target_root:
        raise ConfigurationError("Allow-list is empty. Reload the package first (parse package.json).")

    result = ValidationResult()
    assets = collect_scannable(target_root, enumerate_assets, scan_filter)
    if not assets:
        log.info("validator.no_assets", root=target_root)
        return result
    result.scanned_asset_count = len(assets)

    seen: set[tuple] = set()
    for owner in assets:
        for dep in closure(owner):
            if dep == owner:
                continue
            result.scanned_dependency_count += 1

            kind, fix = classify(dep, roots)
            if kind is None:
                continue
            issue = Issue(owner=owner, dependency=dep, reason=kind, suggested_fix=fix)
            if issue.key in seen:
                continue
            seen.add(issue.key)
            result.issues.append(issue)
            log.debug("validator.issue", owner=owner, dependency=dep, reason=kind.value)

    log.info(
        "validator.finished",
        root=target_root,
        assets=result.scanned_asset_count,
        dependencies=result.scanned_dependency_count,
        issues=len(result.issues),
    )
    return result
