"""Start the resolved command in the background through a shell."""

from __future__ import annotations

import logging
import subprocess

from noxdg import config
from noxdg.errors import LaunchError

logger = logging.getLogger(__name__)


def build_shell_command(target: str, command: str) -> list[str]:
    # The target becomes $0 inside the command string.
    return [config.shell_path(), "-c", f"{command} &", target]


def launch(target: str, command: str) -> None:
    """
    Run ``command`` detached via the shell, with ``target`` bound to ``$0``.

    Only the shell is waited for; it exits once the job is backgrounded, so the
    application's own exit status is never observed.

    Raises:
        LaunchError: the shell could not be started or rejected the command.
    """
    logger.info(command)
    argv = build_shell_command(target, command)
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        raise LaunchError(f"cannot start {argv[0]}: {exc}") from exc
    if completed.returncode != 0:
        raise LaunchError(f"{argv[0]} exited with status {completed.returncode}")
