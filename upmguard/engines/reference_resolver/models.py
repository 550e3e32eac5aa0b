"""Data models for the reference resolver engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ResolveResult:
    """Outcome of resolving a package's module references to package ids."""

    required_modules: set[str] = field(default_factory=set)
    required_packages: set[str] = field(default_factory=set)
    skipped: list[str] = field(default_factory=list)  # unresolved module names
    has_descriptors: bool = False
    fallback_used: bool = False
