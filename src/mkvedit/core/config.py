"""
Configuration management using Dynaconf and Pydantic.

Dynaconf loads optional overrides from `settings.toml` files and from
`MKVEDIT_*` environment variables; Pydantic validates them into a typed
`MkvEditSettings` object. The editor itself always comes from the standard
`EDITOR` environment variable.

The `get_settings` function provides a singleton instance of the settings.
"""

import os
from pathlib import Path
from typing import Optional

from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, ValidationError
from rich.console import Console

console = Console()

# User-scoped config directory (XDG-style)
USER_CONFIG_DIR = Path.home() / ".config" / "mkvedit"
USER_SETTINGS_FILE = USER_CONFIG_DIR / "settings.toml"

settings_loader = Dynaconf(
    envvar_prefix="MKVEDIT",
    # Later files override earlier ones
    settings_files=[
        "settings.toml",
        str(USER_SETTINGS_FILE),
    ],
)


class MkvEditSettings(BaseModel):
    """Validated runtime settings."""

    editor: Optional[str] = None

    # mkvtoolnix binaries, by name on PATH or absolute path
    mkvinfo: str = "mkvinfo"
    mkvextract: str = "mkvextract"
    mkvpropedit: str = "mkvpropedit"

    model_config = ConfigDict(validate_assignment=True, extra="ignore")


_settings_instance: Optional[MkvEditSettings] = None


def get_settings() -> MkvEditSettings:
    """Get the application settings as a singleton Pydantic model."""
    global _settings_instance
    if _settings_instance is None:
        config_dict = {
            str(k).lower(): v for k, v in (settings_loader.as_dict() or {}).items()
        }
        # EDITOR is the only source for the editor command
        config_dict["editor"] = os.getenv("EDITOR") or None
        try:
            _settings_instance = MkvEditSettings(**config_dict)
        except ValidationError as e:
            console.print(f"[red]Configuration error:[/red]\n{e}")
            raise
    return _settings_instance


def reset_settings():
    """Reset in-memory settings so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
    settings_loader.reload()
