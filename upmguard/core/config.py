"""Lookup tables and settings, injected into the engines rather than hard-coded."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from upmguard.exceptions import ConfigurationError

_ENV_TABLES = "UPMGUARD_TABLES"

# Platform/runtime assemblies, never package dependencies.
_BUILTIN_PREFIXES: tuple[str, ...] = (
    "UnityEngine",
    "UnityEditor",
    "mscorlib",
    "System",
    "netstandard",
)

# Only used when the project manifest has no entry for the package.
_FALLBACK_VERSIONS: dict[str, str] = {
    "com.unity.inputsystem": "1.7.0",
    "com.unity.cinemachine": "2.9.7",
    "com.unity.textmeshpro": "3.0.9",
    "com.unity.render-pipelines.universal": "17.0.0",
}

_HEURISTIC_TOKENS: tuple[tuple[str, str], ...] = (
    ("UnityEngine.InputSystem", "com.unity.inputsystem"),
    ("Cinemachine", "com.unity.cinemachine"),
    ("TMPro", "com.unity.textmeshpro"),
    ("UnityEngine.Rendering.Universal", "com.unity.render-pipelines.universal"),
    ("UniversalRenderPipeline", "com.unity.render-pipelines.universal"),
)

_SCAN_EXTENSIONS: tuple[str, ...] = (
    ".prefab", ".unity", ".mat", ".shader", ".shadergraph",
    ".asset", ".controller", ".overrideController",
    ".png", ".jpg", ".jpeg", ".tga", ".psd", ".tif", ".tiff",
    ".fbx", ".wav", ".mp3", ".ogg",
    ".compute", ".cginc", ".hlsl",
)


@dataclass(frozen=True)
class Tables:
    """Static tables consumed by the resolver, reconciler and validator."""

    builtin_prefixes: tuple[str, ...] = _BUILTIN_PREFIXES
    fallback_versions: dict[str, str] = field(default_factory=lambda: dict(_FALLBACK_VERSIONS))
    placeholder_version: str = "1.0.0"
    heuristic_tokens: tuple[tuple[str, str], ...] = _HEURISTIC_TOKENS
    scan_extensions: tuple[str, ...] = _SCAN_EXTENSIONS
    opaque_reference_prefix: str = "GUID:"
    anchor_field: str = "author"

    @classmethod
    def default(cls) -> Tables:
        return cls()

    def is_builtin(self, module_name: str) -> bool:
        return module_name.startswith(self.builtin_prefixes)


def _coerce(name: str, value: object) -> object:
    """Convert a JSON overlay value into the shape the dataclass field expects."""
    if name in ("builtin_prefixes", "scan_extensions"):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Table '{name}' must be a list of strings")
        return tuple(value)
    if name == "heuristic_tokens":
        # Accept either {"token": "pkg"} or [["token", "pkg"], ...]
        pairs = value.items() if isinstance(value, dict) else value
        try:
            return tuple((str(token), str(pkg)) for token, pkg in pairs)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Table '{name}' must map tokens to package ids") from exc
    if name == "fallback_versions":
        if not isinstance(value, dict):
            raise ConfigurationError(f"Table '{name}' must be an object")
        return {str(k): str(v) for k, v in value.items()}
    if not isinstance(value, str):
        raise ConfigurationError(f"Table '{name}' must be a string")
    return value


def load_tables(path: str | Path | None = None) -> Tables:
    """Return the default tables, overlaid with a JSON file when one is given.

    The overlay path comes from *path* or the ``UPMGUARD_TABLES`` env var.
    Keys in the overlay replace the matching defaults; unknown keys are rejected.
    """
    source = path or os.environ.get(_ENV_TABLES)
    tables = Tables.default()
    if not source:
        return tables

    overlay_path = Path(source)
    try:
        data = json.loads(overlay_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read tables overlay {overlay_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Tables overlay {overlay_path} must be a JSON object")

    known = {f.name for f in fields(Tables)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown table(s) in {overlay_path}: {unknown}")

    return replace(tables, **{k: _coerce(k, v) for k, v in data.items()})
