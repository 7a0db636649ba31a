"""
Per-file edit loop.

For each input file: read the title and tag tree, render the editable text,
hand it to the editor, read it back, and commit the header fields and the
reconciled tag tree with a single mkvpropedit call. Files are processed one
at a time in input order; the first error aborts the run, leaving files
already processed committed.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from . import mkvtoolnix
from .config import get_settings
from .editor import launch_editor
from .errors import SetupError
from .fields import ORDERING, is_header_key, is_tag_key
from .logging_util import file_logger
from .tag_tree import extract, merge, serialize_tags
from .text_format import decode, drop_empty, encode

logger = logging.getLogger(__name__)


class ScratchFiles:
    """The two scratch files reused for every input file of a run.

    `tags_path` receives the reconciled tag XML for mkvpropedit, `text_path`
    holds the editable text. Both are emptied by `reset()` before each file
    and deleted when the context exits. The files are re-opened by path
    because many editors save by replacing the file.
    """

    def __init__(self) -> None:
        self.tags_path: Optional[Path] = None
        self.text_path: Optional[Path] = None

    def __enter__(self) -> "ScratchFiles":
        try:
            self.tags_path = self._create(".xml")
            self.text_path = self._create(".txt")
        except OSError as e:
            self.close()
            raise SetupError(f"Could not create temporary file: {e}") from e
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @staticmethod
    def _create(suffix: str) -> Path:
        fd, name = tempfile.mkstemp(prefix="mkvedit-", suffix=suffix)
        os.close(fd)
        return Path(name)

    def reset(self) -> tuple[Path, Path]:
        """Empty both files and return `(tags_path, text_path)`."""
        if self.tags_path is None or self.text_path is None:
            raise SetupError("Scratch files are not open")
        for p in (self.tags_path, self.text_path):
            try:
                p.write_bytes(b"")
            except OSError as e:
                raise SetupError(f"Error clearing temporary file {p}: {e}") from e
        return self.tags_path, self.text_path

    def close(self) -> None:
        for p in (self.tags_path, self.text_path):
            if p is not None:
                p.unlink(missing_ok=True)
        self.tags_path = None
        self.text_path = None


@dataclass
class SyncResult:
    path: Path
    header_instructions: list[str]
    tag_keys: list[str] = field(default_factory=list)


def build_record(header: Mapping[str, str], tags: Mapping[str, str]) -> dict[str, str]:
    record = dict(header)
    record.update(tags)
    return record


def render_document(path: Path, record: Mapping[str, str]) -> str:
    """Editable text for one file; the leading file name line is not parsed back."""
    return f"{path}\n{encode(record, ORDERING)}"


def split_record(record: Mapping[str, str]) -> tuple[dict[str, str], dict[str, str]]:
    header = {k: v for k, v in record.items() if is_header_key(k)}
    tags = {k: v for k, v in record.items() if is_tag_key(k)}
    return header, tags


def sync_file(path: Path, editor: str, scratch: ScratchFiles) -> SyncResult:
    tags_path, text_path = scratch.reset()
    log = file_logger(logger, path)

    header = mkvtoolnix.query_header_fields(path)
    tree = mkvtoolnix.extract_tag_tree(path)
    record = build_record(header, extract(tree))

    text_path.write_text(render_document(path, record), encoding="utf-8")
    launch_editor(editor, text_path)
    edited = drop_empty(decode(text_path.read_text(encoding="utf-8")))

    header_edits, tag_edits = split_record(edited)
    instructions = mkvtoolnix.header_instructions(header_edits)
    log.debug("Header instructions: %s", " ".join(instructions))

    merge(tree, tag_edits)
    tags_file: Optional[Path] = None
    if len(tree):
        tags_path.write_bytes(serialize_tags(tree))
        tags_file = tags_path

    mkvtoolnix.apply_changes(path, instructions, tags_file)
    log.info("Updated")
    return SyncResult(path=path, header_instructions=instructions, tag_keys=sorted(tag_edits))


def run(paths: Sequence[Path], editor: Optional[str] = None) -> list[SyncResult]:
    """Edit every file in `paths`, in order. Raises on the first failure."""
    if not paths:
        raise SetupError("mkv-edit must be given at least one filename to edit")
    editor = editor or get_settings().editor
    if not editor:
        raise SetupError("Please set a system editor in the EDITOR variable!")
    mkvtoolnix.check_tools()

    results: list[SyncResult] = []
    with ScratchFiles() as scratch:
        for p in _as_paths(paths):
            results.append(sync_file(p, editor, scratch))
    return results


def _as_paths(paths: Iterable[Path | str]) -> list[Path]:
    return [Path(p) for p in paths]
