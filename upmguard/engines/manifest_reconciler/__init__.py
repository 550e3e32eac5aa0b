"""Manifest reconciler engine: merge required packages into package.json."""

from upmguard.engines.manifest_reconciler.models import SyncReport
from upmguard.engines.manifest_reconciler.pipeline import sync_dependencies
from upmguard.engines.manifest_reconciler.reconciler import merge, render_dependencies
from upmguard.engines.manifest_reconciler.versions import read_project_versions

__all__ = [
    "SyncReport",
    "merge",
    "read_project_versions",
    "render_dependencies",
    "sync_dependencies",
]
