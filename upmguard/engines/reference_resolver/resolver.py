"""Resolve a package's module references through the module index."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from upmguard.core.config import Tables
from upmguard.engines.package_index import ModuleIndex, iter_descriptors
from upmguard.engines.reference_resolver.heuristics import scan_source_tokens
from upmguard.engines.reference_resolver.models import ResolveResult
from upmguard.manifest import read_document, read_string_list

log = structlog.get_logger("upmguard.engine")


def collect_references(target_root: Path, tables: Tables) -> tuple[set[str], bool]:
    """Union of the ``references`` of every descriptor under *target_root*.

    Opaque references (``GUID:...``) are dropped since they carry no module
    name. The second element is True iff at least one descriptor exists,
    whether or not it declares references.
    """
    descriptors = iter_descriptors(target_root)
    opaque = tables.opaque_reference_prefix.lower()
    names: set[str] = set()

    for descriptor in descriptors:
        try:
            text = read_document(descriptor)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("resolver.descriptor_unreadable", path=str(descriptor), error=str(exc))
            continue
        for raw in read_string_list(text, "references"):
            ref = raw.strip()
            if not ref:
                continue
            if opaque and ref.lower().startswith(opaque):
                continue
            names.add(ref)

    return names, bool(descriptors)


def map_to_packages(
    module_names: Iterable[str],
    index: ModuleIndex,
    tables: Tables,
) -> tuple[set[str], list[str]]:
    """Look each non-builtin module up in *index*.

    Returns ``(package_ids, skipped)``; *skipped* lists misses in sorted
    order. A miss is informational: it is often a same-project assembly.
    """
    packages: set[str] = set()
    skipped: list[str] = []
    for name in sorted(module_names):
        if tables.is_builtin(name):
            continue
        package_id = index.get(name)
        if package_id:
            packages.add(package_id)
        else:
            skipped.append(name)
    return packages, skipped


def resolve(
    target_root: Path,
    index: ModuleIndex,
    tables: Tables,
    fallback_scan: bool = True,
) -> ResolveResult:
    """Full resolution: descriptor references, index lookup, then the textual fallback.

    The fallback runs when the package has no descriptors, or its descriptors
    declare no references at all.
    """
    modules, has_descriptors = collect_references(target_root, tables)
    packages, skipped = map_to_packages(modules, index, tables)
    result = ResolveResult(
        required_modules=modules,
        required_packages=packages,
        skipped=skipped,
        has_descriptors=has_descriptors,
    )

    if fallback_scan and (not has_descriptors or not modules):
        inferred = scan_source_tokens(target_root, tables.heuristic_tokens)
        result.required_packages |= inferred
        result.fallback_used = True
        log.info(
            "resolver.fallback_used",
            root=str(target_root),
            has_descriptors=has_descriptors,
            inferred=sorted(inferred),
        )

    log.info(
        "resolver.resolved",
        root=str(target_root),
        modules=len(modules),
        packages=sorted(result.required_packages),
        skipped=len(skipped),
    )
    return result
