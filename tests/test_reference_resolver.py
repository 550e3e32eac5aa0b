"""Tests for the reference resolver and its textual fallback."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import make_package
from upmguard.core.config import Tables
from upmguard.engines.package_index import ModuleIndex
from upmguard.engines.reference_resolver import (
    collect_references,
    map_to_packages,
    resolve,
    scan_source_tokens,
)


@pytest.fixture
def tables() -> Tables:
    return Tables.default()


@pytest.fixture
def index() -> ModuleIndex:
    idx = ModuleIndex()
    idx.register("Foo", "com.bar.baz")
    idx.register("Unity.TextMeshPro", "com.unity.textmeshpro")
    return idx


class TestCollectReferences:
    def test_union_across_descriptors(self, tmp_path: Path, tables: Tables):
        pkg = make_package(
            tmp_path,
            "com.me.pkg",
            asmdefs={
                "Runtime/Me.asmdef": {"name": "Me", "references": ["Foo", "UnityEngine.UI"]},
                "Editor/Me.Editor.asmdef": {"name": "Me.Editor", "references": ["Me", "Foo"]},
            },
        )
        names, has_descriptors = collect_references(pkg, tables)
        assert names == {"Foo", "UnityEngine.UI", "Me"}
        assert has_descriptors is True

    def test_opaque_references_excluded(self, tmp_path: Path, tables: Tables):
        pkg = make_package(
            tmp_path,
            "com.me.pkg",
            asmdefs={"Me.asmdef": {"name": "Me", "references": ["GUID:abc123", "guid:DEF", " ", "Foo"]}},
        )
        names, _ = collect_references(pkg, tables)
        assert names == {"Foo"}

    def test_descriptor_without_references(self, tmp_path: Path, tables: Tables):
        pkg = make_package(tmp_path, "com.me.pkg", asmdefs={"Me.asmdef": {"name": "Me"}})
        assert collect_references(pkg, tables) == (set(), True)

    def test_no_descriptors(self, tmp_path: Path, tables: Tables):
        pkg = make_package(tmp_path, "com.me.pkg")
        assert collect_references(pkg, tables) == (set(), False)


class TestMapToPackages:
    def test_hit_and_miss(self, index: ModuleIndex, tables: Tables):
        packages, skipped = map_to_packages({"Foo", "LocalAsm", "Me"}, index, tables)
        assert packages == {"com.bar.baz"}
        assert skipped == ["LocalAsm", "Me"]

    def test_builtins_discarded(self, index: ModuleIndex, tables: Tables):
        packages, skipped = map_to_packages(
            {"UnityEngine.UI", "UnityEditor.UI", "System.Xml", "netstandard", "mscorlib"},
            index,
            tables,
        )
        assert packages == set()
        assert skipped == []

    def test_builtin_table_is_injected(self, index: ModuleIndex):
        tables = Tables(builtin_prefixes=("Foo",))
        packages, skipped = map_to_packages({"Foo", "UnityEngine.UI"}, index, tables)
        assert packages == set()
        assert skipped == ["UnityEngine.UI"]


class TestScanSourceTokens:
    def test_token_hits(self, tmp_path: Path):
        (tmp_path / "Runtime").mkdir()
        (tmp_path / "Runtime" / "A.cs").write_text("using TMPro;\nclass A {}\n")
        (tmp_path / "B.cs").write_text("var p = new UniversalRenderPipeline();\n")
        (tmp_path / "C.txt").write_text("Cinemachine")
        found = scan_source_tokens(tmp_path, Tables.default().heuristic_tokens)
        assert found == {"com.unity.textmeshpro", "com.unity.render-pipelines.universal"}

    def test_synthetic_table(self, tmp_path: Path):
        (tmp_path / "A.cs").write_text("using Acme.Widgets;")
        assert scan_source_tokens(tmp_path, [("Acme.", "com.acme.widgets")]) == {"com.acme.widgets"}


class TestResolve:
    def test_descriptor_reference_resolves(self, tmp_path: Path, index: ModuleIndex, tables: Tables):
        pkg = make_package(
            tmp_path, "com.me.pkg", asmdefs={"Me.asmdef": {"name": "Me", "references": ["Foo"]}}
        )
        result = resolve(pkg, index, tables)
        assert result.required_packages == {"com.bar.baz"}
        assert result.required_modules == {"Foo"}
        assert result.fallback_used is False

    def test_fallback_when_no_descriptors(self, tmp_path: Path, index: ModuleIndex, tables: Tables):
        pkg = make_package(tmp_path, "com.me.pkg")
        (pkg / "Cam.cs").write_text("using Cinemachine;")
        result = resolve(pkg, index, tables)
        assert result.has_descriptors is False
        assert result.fallback_used is True
        assert result.required_packages == {"com.unity.cinemachine"}

    def test_fallback_when_descriptors_declare_nothing(
        self, tmp_path: Path, index: ModuleIndex, tables: Tables
    ):
        pkg = make_package(tmp_path, "com.me.pkg", asmdefs={"Me.asmdef": {"name": "Me"}})
        (pkg / "Ui.cs").write_text("using TMPro;")
        result = resolve(pkg, index, tables)
        assert result.has_descriptors is True
        assert result.fallback_used is True
        assert result.required_packages == {"com.unity.textmeshpro"}

    def test_no_fallback_when_references_exist(self, tmp_path: Path, index: ModuleIndex, tables: Tables):
        pkg = make_package(
            tmp_path, "com.me.pkg", asmdefs={"Me.asmdef": {"name": "Me", "references": ["UnityEngine.UI"]}}
        )
        (pkg / "Ui.cs").write_text("using TMPro;")
        result = resolve(pkg, index, tables)
        # Only builtins referenced: nothing resolves, but the fallback stays off.
        assert result.fallback_used is False
        assert result.required_packages == set()

    def test_fallback_disabled(self, tmp_path: Path, index: ModuleIndex, tables: Tables):
        pkg = make_package(tmp_path, "com.me.pkg")
        (pkg / "Ui.cs").write_text("using TMPro;")
        result = resolve(pkg, index, tables, fallback_scan=False)
        assert result.fallback_used is False
        assert result.required_packages == set()

    def test_fallback_unions_with_resolved(self, tmp_path: Path, index: ModuleIndex, tables: Tables):
        pkg = make_package(tmp_path, "com.me.pkg")
        (pkg / "Ui.cs").write_text("using TMPro; using UnityEngine.InputSystem;")
        result = resolve(pkg, index, tables)
        assert result.required_packages == {"com.unity.textmeshpro", "com.unity.inputsystem"}
