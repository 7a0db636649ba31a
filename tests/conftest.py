import logging

import pytest

from mkvedit.core.config import reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    # Keep settings.toml lookups and EDITOR out of the developer's environment
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EDITOR", raising=False)
    for name in ("MKVEDIT_MKVINFO", "MKVEDIT_MKVEXTRACT", "MKVEDIT_MKVPROPEDIT"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # The CLI reconfigures the root logger against the runner's captured stdout
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
