"""Asset graph providers: enumerate assets and return their dependency closure.

The host editor normally owns the asset database; these providers consume an
exported snapshot of it so validation can run outside the editor.
"""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from upmguard.exceptions import ConfigurationError, ParseError


@runtime_checkable
class AssetGraph(Protocol):
    """Interface the boundary validator needs from the host asset database."""

    def assets_under(self, root: str) -> list[str]: ...

    def closure(self, asset: str, recursive: bool = True) -> list[str]: ...

    def contains(self, asset: str) -> bool: ...


class JsonAssetGraph:
    """Asset graph backed by a ``{asset: [direct dependencies]}`` mapping."""

    def __init__(self, edges: Mapping[str, Sequence[str]]) -> None:
        self._edges: dict[str, list[str]] = {k: list(v) for k, v in edges.items()}
        self._assets: set[str] = set(self._edges)
        for deps in self._edges.values():
            self._assets.update(deps)

    @classmethod
    def from_file(cls, path: Path) -> JsonAssetGraph:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"Cannot read asset graph {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid JSON in asset graph {path}: {exc}", path=str(path)) from exc

        if not isinstance(data, dict) or not all(
            isinstance(deps, list) and all(isinstance(d, str) for d in deps)
            for deps in data.values()
        ):
            raise ParseError(
                f"Asset graph {path} must map asset paths to lists of asset paths",
                path=str(path),
            )
        return cls(data)

    def assets_under(self, root: str) -> list[str]:
        return sorted(a for a in self._assets if a.startswith(root))

    def contains(self, asset: str) -> bool:
        return asset in self._assets

    def closure(self, asset: str, recursive: bool = True) -> list[str]:
        """Dependencies of *asset* in discovery order, starting with *asset* itself.

        With ``recursive=False`` only direct dependencies are returned.
        """
        result = [asset]
        seen = {asset}
        queue = deque([asset])
        while queue:
            current = queue.popleft()
            for dep in self._edges.get(current, []):
                if dep in seen:
                    continue
                seen.add(dep)
                result.append(dep)
                if recursive:
                    queue.append(dep)
        return result
