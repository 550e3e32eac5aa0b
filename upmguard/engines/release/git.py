"""Synchronous git helper for the release engine."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from upmguard.exceptions import SubprocessFailure


@dataclass
class GitResult:
    exit_code: int
    stdout: str
    stderr: str


def run_git(workdir: Path, args: list[str]) -> GitResult:
    """Run ``git <args>`` in *workdir* and wait for it to exit.

    Raises :class:`SubprocessFailure` (carrying both streams) on a non-zero
    exit code or when git cannot be started.
    """
    cmd = ["git", *args]
    try:
        proc = subprocess.run(cmd, cwd=workdir, capture_output=True, text=True)
    except OSError as exc:
        raise SubprocessFailure(cmd, -1, "", f"Failed to start git: {exc}") from exc
    if proc.returncode != 0:
        raise SubprocessFailure(cmd, proc.returncode, proc.stdout, proc.stderr)
    return GitResult(exit_code=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def git_available() -> bool:
    try:
        proc = subprocess.run(["git", "--version"], capture_output=True, text=True)
    except OSError:
        return False
    return proc.returncode == 0
