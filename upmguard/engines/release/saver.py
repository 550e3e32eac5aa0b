"""Package saver: patch bump in package.json, then git add/commit/tag."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

import structlog

from upmguard.engines.package_index import MANIFEST_NAME
from upmguard.engines.release.git import git_available, run_git
from upmguard.exceptions import ConfigurationError, ParseError
from upmguard.manifest import find_member, read_document, read_string_field, replace_span, write_document

log = structlog.get_logger("upmguard.engine")

_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")


@dataclass
class SaveResult:
    package: str
    previous_version: str
    version: str
    tag: str


def is_semver(version: str | None) -> bool:
    return bool(version) and _SEMVER_RE.match(version) is not None


def bump_patch(version: str) -> str:
    if not is_semver(version):
        raise ParseError(f"Version is not SemVer (expected X.Y.Z): {version!r}", field="version")
    major, minor, patch = (int(part) for part in version.split("."))
    return f"{major}.{minor}.{patch + 1}"


def set_manifest_version(manifest_path: Path, version: str) -> None:
    """Replace only the value of the top-level ``version`` field."""
    text = read_document(manifest_path)
    member = find_member(text, "version")
    if member is None:
        raise ParseError(
            f"{manifest_path} does not contain a version field.",
            path=str(manifest_path),
            field="version",
        )
    write_document(
        manifest_path,
        replace_span(text, member.value_start, member.value_end, json.dumps(version)),
    )


def save_package(package_dir: Path, message: str | None = None) -> SaveResult:
    """Bump the patch version of the package at *package_dir*, commit and tag it.

    The commit message defaults to ``Bump version to v<next>``; the tag is
    ``v<next>``. Requires a git repository at *package_dir* and git on PATH.
    """
    manifest = package_dir / MANIFEST_NAME
    if not package_dir.is_dir():
        raise ConfigurationError(f"Invalid folder path: {package_dir}")
    if not manifest.is_file():
        raise ConfigurationError(f"No {MANIFEST_NAME} found in {package_dir}")

    text = read_document(manifest)
    name = read_string_field(text, "name") or ""
    current = read_string_field(text, "version")
    if not is_semver(current):
        raise ParseError(
            f"Version in {MANIFEST_NAME} is not SemVer (expected X.Y.Z): {current!r}",
            path=str(manifest),
            field="version",
        )
    if not (package_dir / ".git").is_dir():
        raise ConfigurationError(
            f"{package_dir} has no .git folder. Initialize git first to enable save."
        )
    if not git_available():
        raise ConfigurationError("git is not available on PATH.")

    next_version = bump_patch(current)
    commit_message = f"Bump version to v{next_version}" if message is None else message
    if not commit_message.strip():
        raise ConfigurationError("Commit message cannot be empty.")

    set_manifest_version(manifest, next_version)
    tag = f"v{next_version}"
    run_git(package_dir, ["add", "-A"])
    run_git(package_dir, ["commit", "-m", commit_message])
    run_git(package_dir, ["tag", tag])

    log.info("release.saved", package=name, previous=current, version=next_version, tag=tag)
    return SaveResult(package=name, previous_version=current, version=next_version, tag=tag)
