"""
Reading and reconciling the Matroska tag tree.

`mkvextract <file> tags` prints XML of the form::

    <Tags>
      <Tag>
        <Targets>[<TrackUID>...</TrackUID>]</Targets>
        <Simple><Name>ARTIST</Name><String>...</String></Simple>
      </Tag>
      ...
    </Tags>

The file-level metadata lives in the first `Tag` whose `Targets` carries no
`TrackUID`. Only that entry is read and written here; per-track tags and any
later file-level entries pass through unchanged.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Mapping, Optional

from .errors import TagTreeError
from .fields import TAG_KEYS, is_tag_key

logger = logging.getLogger(__name__)


class EntryState(str, Enum):
    NOT_FOUND = "not_found"
    FOUND_EMPTY = "found_empty"
    FOUND_WITH_FIELDS = "found_with_fields"


def parse_tags(xml_text: str) -> ET.Element:
    """Parse mkvextract output. A file without tags yields an empty root."""
    if not xml_text.strip():
        return ET.Element("Tags")
    try:
        return ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise TagTreeError(f"Output from mkvextract was invalid xml: {e}") from e


def serialize_tags(root: ET.Element) -> bytes:
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def is_metadata_entry(tag: ET.Element) -> bool:
    """True for a file-level `Tag`: one whose `Targets` has no `TrackUID`."""
    targets = tag.find("Targets")
    if targets is None:
        raise TagTreeError("Output from mkvextract had incorrectly formatted track data")
    return targets.find("TrackUID") is None


def find_metadata_entry(root: ET.Element) -> Optional[ET.Element]:
    for child in root:
        if is_metadata_entry(child):
            return child
    return None


def entry_state(root: ET.Element) -> EntryState:
    entry = find_metadata_entry(root)
    if entry is None:
        return EntryState.NOT_FOUND
    if entry.find("Simple") is None:
        return EntryState.FOUND_EMPTY
    return EntryState.FOUND_WITH_FIELDS


def _text(elem: Optional[ET.Element]) -> str:
    if elem is None or elem.text is None:
        return ""
    return elem.text


def _simple_name(simple: ET.Element) -> Optional[str]:
    name = simple.find("Name")
    if name is None:
        return None
    return _text(name)


def _new_simple(key: str, value: str) -> ET.Element:
    simple = ET.Element("Simple")
    ET.SubElement(simple, "Name").text = key
    ET.SubElement(simple, "String").text = value
    return simple


def extract(root: ET.Element) -> dict[str, str]:
    """Read the tag fields of the metadata entry.

    Every tag key is present in the result; fields the file does not carry
    map to the empty string. A repeated field reads its first occurrence,
    the one `merge` keeps.
    """
    record = {key: "" for key in TAG_KEYS}
    entry = find_metadata_entry(root)
    if entry is None:
        return record
    seen: set[str] = set()
    for simple in entry.findall("Simple"):
        key = _simple_name(simple)
        if key is None or not is_tag_key(key) or key in seen:
            continue
        seen.add(key)
        record[key] = _text(simple.find("String"))
    return record


def _reconcile_entry(entry: ET.Element, edited: Mapping[str, str]) -> None:
    handled: set[str] = set()
    children: list[ET.Element] = []
    for child in entry:
        key = _simple_name(child) if child.tag == "Simple" else None
        if key is None or not is_tag_key(key):
            children.append(child)
            continue
        if key in handled:
            logger.debug("Dropping repeated tag %s", key)
            continue
        handled.add(key)
        if key not in edited:
            logger.debug("Removing tag %s", key)
            continue
        string = child.find("String")
        if string is None:
            raise TagTreeError("'Simple' tag in outputted xml didn't have 'String' child.")
        string.text = edited[key]
        children.append(child)

    for key in TAG_KEYS:
        if key in edited and key not in handled:
            logger.debug("Adding tag %s", key)
            children.append(_new_simple(key, edited[key]))

    entry[:] = children


def merge(root: ET.Element, edited: Mapping[str, str]) -> ET.Element:
    """Write the tag fields of `edited` into the metadata entry of `root`.

    Present keys are updated in place or appended, absent keys are removed.
    A missing entry is created. The entry ends up as the first child of the
    tree, and is dropped when it holds no fields at all. Mutates and returns
    `root`.
    """
    entry = find_metadata_entry(root)
    if entry is not None:
        _reconcile_entry(entry, edited)
    else:
        entry = ET.Element("Tag")
        ET.SubElement(entry, "Targets")
        for key in TAG_KEYS:
            if key in edited:
                entry.append(_new_simple(key, edited[key]))
        root.insert(0, entry)

    # mkvpropedit only reliably honors the file-level tag when it comes first
    others = [child for child in root if child is not entry]
    root[:] = [entry] + others

    if entry.find("Simple") is None:
        root.remove(entry)
    return root
