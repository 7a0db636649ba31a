"""
Thin wrappers around the mkvtoolnix command line tools.

- `mkvinfo` reports the segment info header (title)
- `mkvextract <file> tags` prints the tag tree as XML
- `mkvpropedit` rewrites header fields and tags in place

All calls block until the tool exits. Failures raise `ToolError`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Mapping, Optional

from .config import get_settings
from .errors import ToolError
from .fields import HEADER_KEYS
from .tag_tree import parse_tags

logger = logging.getLogger(__name__)


def _run(cmd: list[str]) -> str:
    tool = Path(cmd[0]).name
    logger.debug("Running %s", " ".join(cmd))
    try:
        cp = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as e:
        raise ToolError(
            f"Could not run {tool}. Do you have mkvtoolnix installed? ({e})", tool=tool
        ) from e
    if cp.returncode != 0:
        # mkvtoolnix reports most errors on stdout
        detail = (cp.stderr or "").strip() or (cp.stdout or "").strip()
        raise ToolError(
            f"{tool} failed with exit code {cp.returncode}: {detail or 'no output'}",
            tool=tool,
            stderr=cp.stderr,
        )
    return cp.stdout or ""


def check_tools() -> None:
    """Fail early when any of the mkvtoolnix binaries is not on PATH."""
    s = get_settings()
    missing = [b for b in (s.mkvinfo, s.mkvextract, s.mkvpropedit) if not shutil.which(b)]
    if missing:
        raise ToolError(
            f"Missing {', '.join(missing)}. Do you have mkvtoolnix installed?",
            tool=missing[0],
        )


def parse_header_fields(info_output: str) -> dict[str, str]:
    """Pick header fields out of mkvinfo output.

    For each header key the first line containing `| + <key>: ` (any case)
    wins; the value is the rest of that line.
    """
    lines = info_output.splitlines()
    fields: dict[str, str] = {}
    for key in HEADER_KEYS:
        prefix = f"| + {key}: ".lower()
        fields[key] = ""
        for line in lines:
            idx = line.lower().find(prefix)
            if idx >= 0:
                fields[key] = line[idx + len(prefix):]
                break
    return fields


def query_header_fields(path: Path) -> dict[str, str]:
    return parse_header_fields(_run([get_settings().mkvinfo, str(path)]))


def extract_tag_tree(path: Path) -> ET.Element:
    return parse_tags(_run([get_settings().mkvextract, str(path), "tags"]))


def header_instructions(record: Mapping[str, str]) -> list[str]:
    """Build the `--edit info` arguments: set present header fields, delete absent ones."""
    args = ["--edit", "info"]
    for key in HEADER_KEYS:
        value = record.get(key)
        if value is None:
            args += ["-d", key]
        else:
            args += ["-s", f"{key}={value}"]
    return args


def apply_changes(path: Path, instructions: list[str], tags_file: Optional[Path]) -> None:
    """Commit header edits and the tag tree in one mkvpropedit call.

    `tags_file=None` removes the global tags.
    """
    tags_arg = f"global:{tags_file}" if tags_file is not None else "global:"
    _run([get_settings().mkvpropedit, str(path), *instructions, "--tags", tags_arg])
