"""Textual fallback: infer common package dependencies from C# sources."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

log = structlog.get_logger("upmguard.engine")

SOURCE_GLOB = "*.cs"


def scan_source_tokens(root: Path, tokens: Iterable[tuple[str, str]]) -> set[str]:
    """Return the package ids whose marker token appears in any source under *root*.

    A plain substring test, so a token in a comment or string literal counts too.
    """
    pairs = list(tokens)
    found: set[str] = set()
    for source in sorted(root.rglob(SOURCE_GLOB)):
        if not source.is_file():
            continue
        text = source.read_text(encoding="utf-8", errors="replace")
        for token, package_id in pairs:
            if package_id not in found and token in text:
                log.debug("resolver.token_hit", file=str(source), token=token, package=package_id)
                found.add(package_id)
    return found
