"""MIME classification through the external ``file`` utility."""

from __future__ import annotations

import os
import subprocess

from noxdg import config
from noxdg.errors import MimeDetectionError


def detect_mime(target: str) -> str:
    """
    Return the MIME type reported by ``file --mime-type -b`` for a local path.

    Raises:
        MimeDetectionError: target is not a local file, the utility is missing, or it fails.
    """
    if not target or not os.path.lexists(target):
        raise MimeDetectionError(f"not a local file: {target}")

    command = [config.file_command(), "--mime-type", "-b", target]
    try:
        completed = subprocess.run(command, capture_output=True, check=True, text=True)
    except OSError as exc:
        raise MimeDetectionError(f"cannot run {command[0]}: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        raise MimeDetectionError(f"{command[0]} exited with status {exc.returncode}") from exc
    return completed.stdout.strip()
