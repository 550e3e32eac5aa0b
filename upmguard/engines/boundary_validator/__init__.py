"""Boundary validator engine: check a package's asset closure stays in bounds."""

from upmguard.engines.boundary_validator.models import (
    Issue,
    IssueKind,
    PackageInfo,
    RunStatus,
    ValidationReport,
    ValidationResult,
)
from upmguard.engines.boundary_validator.package import load_package_info
from upmguard.engines.boundary_validator.runner import BoundaryValidator, render_issue
from upmguard.engines.boundary_validator.validator import validate

__all__ = [
    "BoundaryValidator",
    "Issue",
    "IssueKind",
    "PackageInfo",
    "RunStatus",
    "ValidationReport",
    "ValidationResult",
    "load_package_info",
    "render_issue",
    "validate",
]
