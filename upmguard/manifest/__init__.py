"""Manifest document access: field reads, byte-span edits and safe writes."""

from upmguard.manifest.document import (
    Member,
    find_member,
    read_object_field,
    read_string_field,
    read_string_list,
    replace_span,
)
from upmguard.manifest.io import read_document, write_document

__all__ = [
    "Member",
    "find_member",
    "read_document",
    "read_object_field",
    "read_string_field",
    "read_string_list",
    "replace_span",
    "write_document",
]
