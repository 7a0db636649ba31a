"""
Recognized metadata fields.

Every field mkv-edit understands lives either in the segment info header
(written with `mkvpropedit --edit info`) or in the file-level Matroska tag
(written with `mkvpropedit --tags`). Anything else found in edited text is
rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Namespace(str, Enum):
    HEADER = "header"
    TAG = "tag"


class Field(Enum):
    """A recognized field: wire key, namespace and display priority."""

    TITLE = ("title", Namespace.HEADER, 0)
    COMMENT = ("COMMENT", Namespace.TAG, 5)
    ARTIST = ("ARTIST", Namespace.TAG, 1)
    ALBUM = ("ALBUM", Namespace.TAG, 2)
    DATE = ("DATE", Namespace.TAG, None)
    DESCRIPTION = ("DESCRIPTION", Namespace.TAG, 4)
    SYNOPSIS = ("SYNOPSIS", Namespace.TAG, None)
    PURL = ("PURL", Namespace.TAG, 6)
    PART_NUMBER = ("PART_NUMBER", Namespace.TAG, 3)
    TOTAL_PARTS = ("TOTAL_PARTS", Namespace.TAG, None)

    def __init__(self, key: str, namespace: Namespace, priority: Optional[int]):
        self.key = key
        self.namespace = namespace
        self.priority = priority

    @property
    def is_header(self) -> bool:
        return self.namespace is Namespace.HEADER

    @property
    def is_tag(self) -> bool:
        return self.namespace is Namespace.TAG

    @classmethod
    def from_key(cls, key: str) -> Optional["Field"]:
        return _BY_KEY.get(key)


_BY_KEY = {f.key: f for f in Field}

HEADER_KEYS: tuple[str, ...] = tuple(f.key for f in Field if f.is_header)
TAG_KEYS: tuple[str, ...] = tuple(f.key for f in Field if f.is_tag)
ALL_KEYS: tuple[str, ...] = HEADER_KEYS + TAG_KEYS

# Display order for the editable text; fields without a priority follow.
ORDERING: tuple[str, ...] = tuple(
    f.key for f in sorted((f for f in Field if f.priority is not None), key=lambda f: f.priority)
)


def is_recognized(key: str) -> bool:
    return key in _BY_KEY


def is_header_key(key: str) -> bool:
    field = _BY_KEY.get(key)
    return field is not None and field.is_header


def is_tag_key(key: str) -> bool:
    field = _BY_KEY.get(key)
    return field is not None and field.is_tag
