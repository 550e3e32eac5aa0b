"""Additive merge of required package ids into a package manifest.

Only the ``dependencies`` member is rewritten; all other bytes of the
document are carried over unchanged.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path

import structlog

from upmguard.engines.manifest_reconciler.models import SyncReport
from upmguard.exceptions import ConfigurationError, ParseError
from upmguard.manifest import find_member, read_document, replace_span, write_document
from upmguard.manifest.document import iter_members

log = structlog.get_logger("upmguard.engine")

DEPENDENCIES_FIELD = "dependencies"


def render_dependencies(deps: Mapping[str, str]) -> str:
    """Serialize the dependencies member with keys in ordinal order."""
    lines = [
        f"    {json.dumps(key, ensure_ascii=False)}: {json.dumps(deps[key], ensure_ascii=False)}"
        for key in sorted(deps)
    ]
    return f'"{DEPENDENCIES_FIELD}": {{\n' + ",\n".join(lines) + "\n  }"


def _existing_dependencies(text: str, manifest_path: Path) -> dict[str, str]:
    member = find_member(text, DEPENDENCIES_FIELD)
    if member is None:
        return {}
    value = json.loads(text[member.value_start : member.value_end])
    if not isinstance(value, dict):
        raise ParseError(
            f"{manifest_path}: field '{DEPENDENCIES_FIELD}' is not an object",
            path=str(manifest_path),
            field=DEPENDENCIES_FIELD,
        )
    for key, version in value.items():
        if not isinstance(version, str):
            raise ParseError(
                f"{manifest_path}: dependency '{key}' has a non-string version",
                path=str(manifest_path),
                field=DEPENDENCIES_FIELD,
            )
    return value


def _insert_block(text: str, block: str, anchor_field: str | None) -> str:
    """Place a new dependencies member in a document that has none."""
    if anchor_field:
        anchor = find_member(text, anchor_field)
        if anchor is not None:
            return replace_span(text, anchor.start, anchor.start, block + ",\n\n  ")

    members = iter_members(text)
    if members:
        end = members[-1].value_end
        return replace_span(text, end, end, ",\n  " + block)

    open_brace = text.index("{")
    return replace_span(text, open_brace + 1, open_brace + 1, "\n  " + block + "\n")


def merge(
    manifest_path: Path,
    required_packages: Iterable[str],
    authoritative_versions: Mapping[str, str],
    fallback_versions: Mapping[str, str],
    *,
    placeholder_version: str = "1.0.0",
    anchor_field: str | None = "author",
    report: SyncReport | None = None,
) -> tuple[bool, SyncReport]:
    """Merge *required_packages* into the manifest's dependencies.

    Missing ids are added with the authoritative version, else the fallback
    table version, else *placeholder_version*. Present ids are only updated
    when the authoritative source has a different explicit version. Nothing
    is ever removed. The file is rewritten only if something changed.

    Raises :class:`ConfigurationError` if the manifest does not exist and
    :class:`ParseError` if it is not a well-formed object.
    """
    report = report if report is not None else SyncReport()

    if not manifest_path.is_file():
        raise ConfigurationError(f"Manifest not found: {manifest_path}")
    try:
        text = read_document(manifest_path)
    except UnicodeDecodeError as exc:
        raise ParseError(f"{manifest_path}: not valid UTF-8", path=str(manifest_path)) from exc

    try:
        member = find_member(text, DEPENDENCIES_FIELD)
    except ParseError as exc:
        raise ParseError(f"{manifest_path}: {exc}", path=str(manifest_path)) from exc
    working = _existing_dependencies(text, manifest_path)

    changed = False
    for package_id in sorted(set(required_packages)):
        current = working.get(package_id)
        if current is None:
            version = (
                authoritative_versions.get(package_id)
                or fallback_versions.get(package_id)
                or placeholder_version
            )
            working[package_id] = version
            report.added.append(f"{package_id}@{version}")
            changed = True
        elif package_id in authoritative_versions and authoritative_versions[package_id] != current:
            version = authoritative_versions[package_id]
            working[package_id] = version
            report.updated.append(f"{package_id}: {current} -> {version}")
            changed = True

    report.changed = changed
    if not changed:
        log.debug("reconciler.unchanged", path=str(manifest_path))
        return False, report

    block = render_dependencies(working)
    if member is not None:
        updated = replace_span(text, member.start, member.value_end, block)
    else:
        updated = _insert_block(text, block, anchor_field)

    write_document(manifest_path, updated)
    log.info(
        "reconciler.written",
        path=str(manifest_path),
        added=report.added,
        updated=report.updated,
    )
    return True, report
