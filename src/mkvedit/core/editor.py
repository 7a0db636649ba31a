from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from .errors import EditorError

logger = logging.getLogger(__name__)


def launch_editor(editor: str, path: Path) -> None:
    """Open `path` in `editor` and wait for it to exit.

    `editor` may carry arguments (e.g. "code --wait"). There is no timeout.
    """
    try:
        cmd = shlex.split(editor) + [str(path)]
        logger.debug("Launching editor: %s", " ".join(cmd))
        rc = subprocess.run(cmd, check=False).returncode
    except (OSError, ValueError) as e:
        raise EditorError(f"Could not open the editor '{editor}': {e}") from e
    if rc != 0:
        raise EditorError(f"Editor '{editor}' exited with status {rc}")
