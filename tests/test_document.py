"""Tests for manifest document access and safe writes."""

from __future__ import annotations

from pathlib import Path

import pytest

from upmguard.exceptions import ParseError
from upmguard.manifest import (
    find_member,
    read_document,
    read_object_field,
    read_string_field,
    read_string_list,
    replace_span,
    write_document,
)
from upmguard.manifest.document import iter_members

_DOC = '{\n  "name": "com.foo.bar",\n  "nested": {"name": "inner"},\n  "dependencies": {"a": "1", "b": 2}\n}\n'


class TestIterMembers:
    def test_top_level_only(self):
        keys = [m.key for m in iter_members(_DOC)]
        assert keys == ["name", "nested", "dependencies"]

    def test_offsets_cover_key_and_value(self):
        m = find_member(_DOC, "name")
        assert _DOC[m.start : m.value_end] == '"name": "com.foo.bar"'

    def test_empty_object(self):
        assert iter_members("  {  }  ") == []

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            iter_members('["a"]')

    def test_truncated_document(self):
        with pytest.raises(ParseError):
            iter_members('{"name": "x", ')

    def test_braces_inside_strings(self):
        doc = '{"description": "uses { and } freely", "name": "x"}'
        assert read_string_field(doc, "name") == "x"


class TestFieldReads:
    def test_string_field(self):
        assert read_string_field(_DOC, "name") == "com.foo.bar"

    def test_nested_name_not_top_level(self):
        assert read_string_field('{"nested": {"name": "inner"}}', "name") is None

    def test_missing_field(self):
        assert read_string_field(_DOC, "version") is None

    def test_malformed_is_best_effort(self):
        assert read_string_field("not json", "name") is None
        assert read_object_field("not json", "dependencies") == {}

    def test_object_field_skips_non_strings(self):
        assert read_object_field(_DOC, "dependencies") == {"a": "1"}

    def test_object_field_keeps_order(self):
        doc = '{"dependencies": {"z": "1", "a": "2"}}'
        assert list(read_object_field(doc, "dependencies")) == ["z", "a"]

    def test_string_list(self):
        doc = '{"references": ["A", 3, "B"]}'
        assert read_string_list(doc, "references") == ["A", "B"]

    def test_replace_span(self):
        assert replace_span("abcdef", 2, 4, "XY") == "abXYef"


class TestIO:
    def test_read_keeps_crlf(self, tmp_path: Path):
        f = tmp_path / "package.json"
        f.write_bytes(b'{\r\n  "name": "x"\r\n}\r\n')
        assert read_document(f) == '{\r\n  "name": "x"\r\n}\r\n'

    def test_read_drops_bom(self, tmp_path: Path):
        f = tmp_path / "package.json"
        f.write_bytes(b'\xef\xbb\xbf{"name": "x"}')
        assert read_document(f) == '{"name": "x"}'

    def test_write_no_bom_and_no_temp_left(self, tmp_path: Path):
        f = tmp_path / "package.json"
        f.write_text("old")
        write_document(f, '{"name": "é"}')
        assert f.read_bytes() == '{"name": "é"}'.encode("utf-8")
        assert [p.name for p in tmp_path.iterdir()] == ["package.json"]
