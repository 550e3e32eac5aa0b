"""BoundaryValidator: load a package and run the dependency chain test."""

from __future__ import annotations

from pathlib import Path

import structlog

from upmguard.core.config import Tables
from upmguard.engines.boundary_validator.models import (
    Issue,
    PackageInfo,
    RunStatus,
    ValidationReport,
)
from upmguard.engines.boundary_validator.package import load_package_info
from upmguard.engines.boundary_validator.rules import make_scan_filter, reason_text
from upmguard.engines.boundary_validator.validator import validate
from upmguard.exceptions import UpmGuardError
from upmguard.graph import AssetGraph

log = structlog.get_logger("upmguard.engine")


def render_issue(issue: Issue) -> str:
    """Operator-facing failure text for one issue."""
    reason = reason_text(issue.reason)
    if issue.suggested_fix:
        reason = f"{reason}\n  {issue.suggested_fix}"
    return (
        "[Dependency Chain Test Failed]\n"
        f"Owner asset:\n  {issue.owner}\n"
        f"Bad dependency:\n  {issue.dependency}\n"
        f"Reason:\n  {reason}\n\n"
        "Fix:\n"
        "  - Move the dependency into the package, OR\n"
        "  - Declare the dependency in package.json (recommended), OR\n"
        "  - Remove the reference."
    )


class BoundaryValidator:
    """Stateful front end: load a package, then test it against the asset graph.

    The loaded package is reset on every :meth:`load`; each :meth:`run` starts
    from an empty report, so no results leak between runs.
    """

    def __init__(self, graph: AssetGraph, tables: Tables | None = None) -> None:
        self._graph = graph
        self._tables = tables or Tables.default()
        self._package: PackageInfo | None = None
        self._load_error: ValidationReport | None = None

    @property
    def package(self) -> PackageInfo | None:
        return self._package

    def load(self, package_dir: Path) -> ValidationReport | None:
        """Load *package_dir*. Returns an ERROR report on failure, else None."""
        self._package = None
        self._load_error = None
        try:
            self._package = load_package_info(package_dir, is_visible=self._graph.contains)
        except UpmGuardError as exc:
            log.warning("validator.load_failed", path=str(package_dir), error=str(exc))
            self._load_error = ValidationReport(
                status=RunStatus.ERROR,
                message=str(exc),
                error_kind=type(exc).__name__,
            )
            return self._load_error
        log.info(
            "validator.package_loaded",
            package=self._package.name,
            declared=len(self._package.declared_dependencies),
        )
        return None

    def run(self) -> ValidationReport:
        if self._load_error is not None:
            return self._load_error
        package = self._package
        if package is None:
            return ValidationReport(
                status=RunStatus.ERROR,
                message="No valid package selected.",
                error_kind="ConfigurationError",
            )

        notes = [f"Declared dependencies: {len(package.declared_dependencies)}"]
        try:
            result = validate(
                package.root,
                package.declared_dependencies,
                self._graph.assets_under,
                self._graph.closure,
                make_scan_filter(self._tables.scan_extensions),
            )
        except UpmGuardError as exc:
            return ValidationReport(
                status=RunStatus.ERROR,
                package=package,
                notes=notes,
                message=str(exc),
                error_kind=type(exc).__name__,
            )

        if result.scanned_asset_count == 0:
            return ValidationReport(
                status=RunStatus.NO_ASSETS,
                package=package,
                notes=notes,
                message=(
                    f"No scannable assets found under: {package.root}\n"
                    "Tip: Add assets (prefabs/materials/shaders/textures/etc.) "
                    "or widen the scan extensions."
                ),
            )

        status = RunStatus.PASSED if result.passed else RunStatus.FAILED
        notes.append("Test PASS." if result.passed else "Test FAIL.")
        if result.passed:
            message = (
                f"PASS  Scanned {result.scanned_asset_count} assets. "
                f"Checked {result.scanned_dependency_count} dependencies."
            )
        else:
            message = f"FAIL  Found {len(result.issues)} issue(s)."
        return ValidationReport(
            status=status,
            package=package,
            issues=result.issues,
            scanned_asset_count=result.scanned_asset_count,
            scanned_dependency_count=result.scanned_dependency_count,
            notes=notes,
            message=message,
        )

    def check(self, package_dir: Path) -> ValidationReport:
        """Load and run in one call."""
        failed = self.load(package_dir)
        return failed if failed is not None else self.run()
