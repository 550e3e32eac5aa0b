"""Dependency sync pipeline: index -> resolve -> merge."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from upmguard.core.config import Tables
from upmguard.engines.manifest_reconciler.models import SyncReport
from upmguard.engines.manifest_reconciler.reconciler import merge
from upmguard.engines.manifest_reconciler.versions import read_project_versions
from upmguard.engines.package_index import MANIFEST_NAME, build_index, default_install_locations
from upmguard.engines.reference_resolver import resolve
from upmguard.exceptions import ConfigurationError

log = structlog.get_logger("upmguard.engine")


def sync_dependencies(
    target_root: Path,
    project_root: Path,
    tables: Tables | None = None,
    fallback_scan: bool = True,
    install_locations: Sequence[Path] | None = None,
) -> SyncReport:
    """Sync ``package.json`` dependencies of *target_root* from its asmdef references.

    Module names resolve through packages installed in *project_root*;
    versions come from the project's ``Packages/manifest.json`` when listed.
    Call this before saving or tagging a package.
    """
    tables = tables or Tables.default()
    if not target_root.is_dir():
        raise ConfigurationError(f"Invalid target package root: {target_root}")
    manifest_path = target_root / MANIFEST_NAME
    if not manifest_path.is_file():
        raise ConfigurationError(f"Target folder does not contain {MANIFEST_NAME}: {target_root}")

    locations = (
        list(install_locations)
        if install_locations is not None
        else default_install_locations(project_root)
    )
    index = build_index(locations)
    resolved = resolve(target_root, index, tables, fallback_scan=fallback_scan)

    report = SyncReport(
        required_modules=set(resolved.required_modules),
        resolved_packages=set(resolved.required_packages),
        skipped=list(resolved.skipped),
    )
    if resolved.fallback_used:
        report.notes.append(
            "Fallback scan enabled: added common dependencies inferred from C# usings."
            if resolved.has_descriptors
            else "No asmdef found: used fallback scan from C# usings for common dependencies."
        )

    merge(
        manifest_path,
        resolved.required_packages,
        read_project_versions(project_root),
        tables.fallback_versions,
        placeholder_version=tables.placeholder_version,
        anchor_field=tables.anchor_field,
        report=report,
    )
    log.info(
        "sync.finished",
        package=str(target_root),
        changed=report.changed,
        added=len(report.added),
        updated=len(report.updated),
        skipped=len(report.skipped),
    )
    return report
