"""Reference resolver engine: derive required packages from module references."""

from upmguard.engines.reference_resolver.heuristics import scan_source_tokens
from upmguard.engines.reference_resolver.models import ResolveResult
from upmguard.engines.reference_resolver.resolver import (
    collect_references,
    map_to_packages,
    resolve,
)

__all__ = [
    "ResolveResult",
    "collect_references",
    "map_to_packages",
    "resolve",
    "scan_source_tokens",
]
