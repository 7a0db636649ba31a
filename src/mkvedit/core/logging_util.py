"""Logging for mkv-edit runs.

Human output goes through rich; `--json-logs` switches to one JSON object per
line. Messages logged through `file_logger` carry the Matroska file they are
about, which the JSON form reports as `file`.
"""

import json as _json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler

FILE_ATTR = "mkv_file"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        mkv_file = getattr(record, FILE_ATTR, None)
        if mkv_file is not None:
            payload["file"] = mkv_file
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(payload, ensure_ascii=False)


class _FileAdapter(logging.LoggerAdapter):
    """Prefixes messages with the file name and records it on the log record."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra[FILE_ATTR] = self.extra[FILE_ATTR]
        kwargs["extra"] = extra
        return f"{self.extra[FILE_ATTR]}: {msg}", kwargs


def file_logger(logger: logging.Logger, path: Path) -> logging.LoggerAdapter:
    return _FileAdapter(logger, {FILE_ATTR: str(path)})


def resolve_level(verbose: bool | None = None, quiet: bool | None = None) -> int:
    """INFO by default, DEBUG when verbose, WARNING when quiet (quiet wins)."""
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    *, json_logs: bool = False, verbose: bool | None = None, quiet: bool | None = None
) -> None:
    """Configure the root logger once per run.

    Unrecognized-header warnings stay visible at every level; `--verbose`
    adds the mkvtoolnix and editor command lines.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(resolve_level(verbose, quiet))

    handler: logging.Handler
    if json_logs:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(soft_wrap=True),
            show_time=False,
            show_path=bool(verbose),
            markup=False,
        )
    root.addHandler(handler)
