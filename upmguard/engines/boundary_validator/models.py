"""Data models for the boundary validator engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class IssueKind(str, enum.Enum):
    NON_PORTABLE = "non-portable"
    FORBIDDEN = "forbidden project-local"
    UNDECLARED = "undeclared"


class RunStatus(str, enum.Enum):
    PASSED = "passed"
    FAILED = "failed"
    NO_ASSETS = "no_assets"
    ERROR = "error"


@dataclass(frozen=True)
class Issue:
    """A bad dependency edge. Identity is ``(owner, dependency, reason)``."""

    owner: str
    dependency: str
    reason: IssueKind
    suggested_fix: str = field(default="", compare=False)

    @property
    def key(self) -> tuple[str, str, IssueKind]:
        return (self.owner, self.dependency, self.reason)


@dataclass
class PackageInfo:
    """What a validation run needs to know about the target package."""

    name: str
    declared_dependencies: list[str]
    root: str  # e.g. "Packages/com.foo.bar/"


@dataclass
class ValidationResult:
    """Raw output of a single closure walk."""

    issues: list[Issue] = field(default_factory=list)
    scanned_asset_count: int = 0
    scanned_dependency_count: int = 0

    @property
    def passed(self) -> bool:
        return not self.issues and self.scanned_asset_count > 0


@dataclass
class ValidationReport:
    """Terminal status of one validation run, as shown to the operator."""

    status: RunStatus
    package: PackageInfo | None = None
    issues: list[Issue] = field(default_factory=list)
    scanned_asset_count: int = 0
    scanned_dependency_count: int = 0
    notes: list[str] = field(default_factory=list)
    message: str = ""
    error_kind: str | None = None  # exception class name when status is ERROR
