"""Runtime settings: fixed paths and their environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

RULES_FILENAME = ".no-xdg-open"
DEFAULT_FILE_COMMAND = "/usr/bin/file"
DEFAULT_SHELL = "/bin/sh"


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def flag_from_env(var: str, default: bool, environ: Optional[Mapping[str, str]] = None) -> bool:
    value = _env(environ).get(var)
    if value is None:
        return default
    return str(value).strip().lower() not in {"", "0", "false", "off", "no", "none"}


def rules_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the rules document location, honoring NO_XDG_OPEN_CONFIG."""
    env = _env(environ)
    override = env.get("NO_XDG_OPEN_CONFIG")
    if override:
        return Path(override)
    # Built like "${HOME}/.no-xdg-open"; an unset HOME lands at the filesystem root.
    return Path(f"{env.get('HOME', '')}/{RULES_FILENAME}")


def file_command(environ: Optional[Mapping[str, str]] = None) -> str:
    return _env(environ).get("NO_XDG_OPEN_FILE_COMMAND") or DEFAULT_FILE_COMMAND


def shell_path(environ: Optional[Mapping[str, str]] = None) -> str:
    return _env(environ).get("NO_XDG_OPEN_SHELL") or DEFAULT_SHELL


def log_dir(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    value = _env(environ).get("NO_XDG_OPEN_LOG_DIR")
    if not value:
        return None
    return Path(value).expanduser()


def is_verbose(environ: Optional[Mapping[str, str]] = None) -> bool:
    return flag_from_env("NO_XDG_OPEN_VERBOSE", False, environ)


# Executables are only taken from the real environment, never from the env file.
ENV_FILE_BLOCKED = frozenset({"NO_XDG_OPEN_FILE_COMMAND", "NO_XDG_OPEN_SHELL"})


def env_file_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the user's env file, ``$HOME/.no-xdg-open.env``."""
    return Path(f"{_env(environ).get('HOME', '')}/{RULES_FILENAME}.env")
