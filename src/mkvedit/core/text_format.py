"""
Plain-text form of a metadata record, as shown in the editor.

Each field is a block:

    (-------ARTIST-------)
    Pink Floyd

Values may span several lines and contain blank lines; only a line that is
exactly a header starts a new block. Anything before the first header is
free-form context and is ignored when reading the text back.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Optional

from .fields import ALL_KEYS, ORDERING, is_recognized

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"\(-------(?P<name>.+)-------\)")


def format_header(key: str) -> str:
    return f"(-------{key}-------)"


def encode(record: Mapping[str, str], ordering: Iterable[str] = ORDERING) -> str:
    """Render a record as editable text.

    Keys from `ordering` come first (emitted even when missing from the
    record), then the remaining record keys in the record's own order.
    """
    ordering = list(ordering)
    keys = ordering + [k for k in record if k not in ordering]
    return "".join(f"{format_header(key)}\n{record.get(key, '')}\n" for key in keys)


def decode(text: str) -> dict[str, str]:
    """Parse editable text back into a record.

    Blocks with an unrecognized name are dropped with a warning. Values are
    stripped of surrounding whitespace. Empty values are kept; see
    `drop_empty`.
    """
    record: dict[str, str] = {}
    key: Optional[str] = None
    lines: list[str] = []

    for line in text.split("\n"):
        match = HEADER_PATTERN.fullmatch(line.rstrip("\r"))
        if match is None:
            lines.append(line)
            continue
        if key is not None:
            record[key] = "\n".join(lines).strip()
        lines = []
        key = match.group("name")
        if not is_recognized(key):
            logger.warning("File contained unrecognized header: '%s'", key)
            key = None

    if key is not None:
        record[key] = "\n".join(lines).strip()
    return record


def drop_empty(record: Mapping[str, str]) -> dict[str, str]:
    """Remove recognized keys whose value is empty; a cleared field means delete."""
    return {k: v for k, v in record.items() if not (k in ALL_KEYS and v == "")}
