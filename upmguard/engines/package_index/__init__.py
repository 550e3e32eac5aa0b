"""Package index engine: map compiled module names to their owning package."""

from upmguard.engines.package_index.builder import (
    DESCRIPTOR_GLOB,
    MANIFEST_NAME,
    build_index,
    default_install_locations,
    iter_descriptors,
)
from upmguard.engines.package_index.models import ModuleIndex

__all__ = [
    "DESCRIPTOR_GLOB",
    "MANIFEST_NAME",
    "ModuleIndex",
    "build_index",
    "default_install_locations",
    "iter_descriptors",
]
