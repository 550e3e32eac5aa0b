"""Release engine: bump a package's patch version, then commit and tag it."""

from upmguard.engines.release.git import GitResult, git_available, run_git
from upmguard.engines.release.saver import (
    bump_patch,
    is_semver,
    save_package,
    set_manifest_version,
)

__all__ = [
    "GitResult",
    "bump_patch",
    "git_available",
    "is_semver",
    "run_git",
    "save_package",
    "set_manifest_version",
]
