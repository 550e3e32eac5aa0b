"""Data models for the package index engine."""

from __future__ import annotations

from collections.abc import Iterator


class ModuleIndex:
    """Module name -> package id, where the first registration for a name wins."""

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}

    def register(self, module_name: str, package_id: str) -> bool:
        """Insert *module_name* unless it is already mapped.

        Returns True if the entry was added, False if an earlier one was kept.
        """
        if module_name in self._owners:
            return False
        self._owners[module_name] = package_id
        return True

    def get(self, module_name: str) -> str | None:
        return self._owners.get(module_name)

    def __contains__(self, module_name: object) -> bool:
        return module_name in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    def __iter__(self) -> Iterator[str]:
        return iter(self._owners)

    def items(self) -> list[tuple[str, str]]:
        return list(self._owners.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._owners)
