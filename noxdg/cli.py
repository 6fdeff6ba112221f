"""Command-line entry: open a file or URL with the application its rules select."""

from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from dotenv import dotenv_values

from noxdg import config
from noxdg.dispatch.launcher import launch
from noxdg.dispatch.resolver import resolve
from noxdg.errors import ConfigError, LaunchError, ResolutionNotFound
from noxdg.logging_setup import setup_logging
from noxdg.logging_utils import log_event, new_run_id
from noxdg.rules.loader import load_rules

logger = logging.getLogger("noxdg.cli")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FAILURE = 4


def load_env_file() -> None:
    """Apply ``~/.no-xdg-open.env`` without overriding the real environment."""
    for key, value in dotenv_values(config.env_file_path()).items():
        if value is None or key in config.ENV_FILE_BLOCKED or key in os.environ:
            continue
        os.environ[key] = value


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_env_file()
    setup_logging()

    args = list(sys.argv[1:] if argv is None else argv)
    # Exactly one argument, taken literally; a leading dash is part of the target.
    if len(args) != 1:
        prog = os.path.basename(sys.argv[0]) or "no-xdg-open"
        logger.error("usage: %s <file | url>", prog)
        return EXIT_USAGE

    target = args[0]
    run_id = new_run_id()

    path = config.rules_path()
    try:
        rules = load_rules(path)
    except ConfigError as exc:
        logger.error("Could not load %s: %s", path, exc)
        log_event("failed", run_id, stage="load", path=str(path), error=str(exc))
        return EXIT_FAILURE
    log_event("rules_loaded", run_id, path=str(path))

    try:
        app_name, command = resolve(target, rules)
    except ResolutionNotFound as exc:
        logger.error(str(exc))
        log_event("failed", run_id, stage="resolve", target=target)
        return EXIT_FAILURE
    log_event("resolved", run_id, target=target, app_name=app_name, command=command)

    try:
        launch(target, command)
    except LaunchError as exc:
        logger.error(str(exc))
        log_event("failed", run_id, stage="launch", command=command, error=str(exc))
        return EXIT_FAILURE

    log_event("launched", run_id, command=command)
    return EXIT_OK


def run() -> NoReturn:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
