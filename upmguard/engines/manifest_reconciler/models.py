"""Data models for the manifest reconciler engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SyncReport:
    """Result of one dependency sync run."""

    required_modules: set[str] = field(default_factory=set)
    resolved_packages: set[str] = field(default_factory=set)
    added: list[str] = field(default_factory=list)  # "com.xxx@ver"
    updated: list[str] = field(default_factory=list)  # "com.xxx: old -> new"
    skipped: list[str] = field(default_factory=list)  # unresolved module names
    notes: list[str] = field(default_factory=list)
    changed: bool = False
