"""Top-level field access over a JSON document that keeps byte offsets.

Values are decoded with the stdlib ``json`` decoder; this module only walks
the outer object so callers can replace one member's value in place and leave
every other byte of the document untouched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from json.decoder import scanstring

from upmguard.exceptions import ParseError

_WHITESPACE = " \t\n\r"
_decoder = json.JSONDecoder()


@dataclass(frozen=True)
class Member:
    """One top-level ``"key": value`` pair and its character offsets."""

    key: str
    start: int  # opening quote of the key
    value_start: int
    value_end: int  # exclusive

    @property
    def end(self) -> int:
        return self.value_end


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _char(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


def iter_members(text: str) -> list[Member]:
    """Return the top-level members of the object in *text*, in document order.

    Raises :class:`ParseError` if *text* is not a single JSON object.
    """
    pos = _skip_ws(text, 0)
    if _char(text, pos) != "{":
        raise ParseError("document is not a JSON object")

    members: list[Member] = []
    pos = _skip_ws(text, pos + 1)
    if _char(text, pos) == "}":
        return members

    while True:
        if _char(text, pos) != '"':
            raise ParseError(f"expected a member name at offset {pos}")
        key_start = pos
        try:
            key, pos = scanstring(text, pos + 1)
            pos = _skip_ws(text, pos)
            if _char(text, pos) != ":":
                raise ParseError(f"expected ':' after member {key!r} at offset {pos}")
            value_start = _skip_ws(text, pos + 1)
            _, value_end = _decoder.raw_decode(text, value_start)
        except json.JSONDecodeError as exc:
            raise ParseError(f"malformed JSON: {exc}") from exc
        members.append(Member(key, key_start, value_start, value_end))

        pos = _skip_ws(text, value_end)
        sep = _char(text, pos)
        if sep == "}":
            return members
        if sep != ",":
            raise ParseError(f"expected ',' or '}}' at offset {pos}")
        pos = _skip_ws(text, pos + 1)


def find_member(text: str, key: str) -> Member | None:
    """First top-level member named *key*, or None."""
    for member in iter_members(text):
        if member.key == key:
            return member
    return None


def _member_value(text: str, key: str) -> object | None:
    try:
        member = find_member(text, key)
    except ParseError:
        return None
    if member is None:
        return None
    return json.loads(text[member.value_start : member.value_end])


def read_string_field(text: str, key: str) -> str | None:
    """Best-effort read of a top-level string field; None if absent or unreadable."""
    value = _member_value(text, key)
    if isinstance(value, str) and value:
        return value
    return None


def read_object_field(text: str, key: str) -> dict[str, str]:
    """Best-effort read of a top-level object as an ordered key -> string map.

    Entries whose value is not a string are skipped.
    """
    value = _member_value(text, key)
    if not isinstance(value, dict):
        return {}
    return {k: v for k, v in value.items() if isinstance(v, str)}


def read_string_list(text: str, key: str) -> list[str]:
    """Best-effort read of a top-level array; non-string items are skipped."""
    value = _member_value(text, key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def replace_span(text: str, start: int, end: int, replacement: str) -> str:
    return text[:start] + replacement + text[end:]
