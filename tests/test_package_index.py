"""Tests for the package index builder."""

from __future__ import annotations

from pathlib import Path

from tests.conftest import make_package, write_json
from upmguard.engines.package_index import (
    ModuleIndex,
    build_index,
    default_install_locations,
    iter_descriptors,
)


class TestModuleIndex:
    def test_first_registration_wins(self):
        index = ModuleIndex()
        assert index.register("Foo", "com.a") is True
        assert index.register("Foo", "com.b") is False
        assert index.get("Foo") == "com.a"
        assert len(index) == 1

    def test_missing(self):
        assert ModuleIndex().get("Foo") is None


class TestBuildIndex:
    def test_maps_descriptor_names(self, project: Path):
        make_package(
            project / "Packages",
            "com.bar.baz",
            asmdefs={
                "Runtime/Foo.asmdef": {"name": "Foo"},
                "Editor/Foo.Editor.asmdef": {"name": "Foo.Editor"},
            },
        )
        index = build_index(default_install_locations(project))
        assert index.as_dict() == {"Foo": "com.bar.baz", "Foo.Editor": "com.bar.baz"}

    def test_earlier_location_wins(self, project: Path):
        make_package(project / "Packages", "com.local.fork", asmdefs={"Foo.asmdef": {"name": "Foo"}})
        make_package(
            project / "Library" / "PackageCache",
            "com.upstream",
            dir_name="com.upstream@1.0.0",
            asmdefs={"Foo.asmdef": {"name": "Foo"}},
        )
        index = build_index(default_install_locations(project))
        assert index.get("Foo") == "com.local.fork"

    def test_location_order_is_caller_order(self, project: Path):
        make_package(project / "Packages", "com.local.fork", asmdefs={"Foo.asmdef": {"name": "Foo"}})
        make_package(
            project / "Library" / "PackageCache",
            "com.upstream",
            asmdefs={"Foo.asmdef": {"name": "Foo"}},
        )
        locations = list(reversed(default_install_locations(project)))
        assert build_index(locations).get("Foo") == "com.upstream"

    def test_package_id_comes_from_manifest_not_folder(self, project: Path):
        make_package(
            project / "Library" / "PackageCache",
            "com.unity.textmeshpro",
            dir_name="com.unity.textmeshpro@3.0.9",
            asmdefs={"Scripts/Runtime/Unity.TextMeshPro.asmdef": {"name": "Unity.TextMeshPro"}},
        )
        index = build_index(default_install_locations(project))
        assert index.get("Unity.TextMeshPro") == "com.unity.textmeshpro"

    def test_nested_packages_are_invisible(self, project: Path):
        outer = make_package(project / "Packages", "com.outer")
        make_package(outer / "Samples", "com.inner", asmdefs={"Inner.asmdef": {"name": "Inner"}})
        index = build_index(default_install_locations(project))
        # The nested descriptor is still found, but attributed to the outer package.
        assert index.get("Inner") == "com.outer"
        assert "com.inner" not in set(index.as_dict().values())

    def test_skips_folder_without_manifest(self, project: Path):
        write_json(project / "Packages" / "loose" / "Loose.asmdef", {"name": "Loose"})
        assert len(build_index(default_install_locations(project))) == 0

    def test_skips_manifest_without_name(self, project: Path):
        write_json(project / "Packages" / "anon" / "package.json", {"version": "1.0.0"})
        write_json(project / "Packages" / "anon" / "Anon.asmdef", {"name": "Anon"})
        assert len(build_index(default_install_locations(project))) == 0

    def test_skips_descriptor_without_name(self, project: Path):
        make_package(
            project / "Packages",
            "com.bar.baz",
            asmdefs={"A.asmdef": {"references": []}, "B.asmdef": {"name": "B"}},
        )
        (project / "Packages" / "com.bar.baz" / "C.asmdef").write_text("{broken")
        assert build_index(default_install_locations(project)).as_dict() == {"B": "com.bar.baz"}

    def test_missing_locations(self, tmp_path: Path):
        assert len(build_index(default_install_locations(tmp_path))) == 0

    def test_deterministic_within_location(self, project: Path):
        make_package(project / "Packages", "com.b", asmdefs={"Dup.asmdef": {"name": "Dup"}})
        make_package(project / "Packages", "com.a", asmdefs={"Dup.asmdef": {"name": "Dup"}})
        first = build_index(default_install_locations(project)).as_dict()
        second = build_index(default_install_locations(project)).as_dict()
        assert first == second == {"Dup": "com.a"}


class TestIterDescriptors:
    def test_shallow_first(self, tmp_path: Path):
        write_json(tmp_path / "a" / "b" / "Deep.asmdef", {"name": "Deep"})
        write_json(tmp_path / "z" / "Mid.asmdef", {"name": "Mid"})
        write_json(tmp_path / "Top.asmdef", {"name": "Top"})
        names = [p.name for p in iter_descriptors(tmp_path)]
        assert names == ["Top.asmdef", "Mid.asmdef", "Deep.asmdef"]
