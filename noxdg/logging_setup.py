from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from noxdg import config

APP_LOGGER = "noxdg"
EVENTS_LOGGER = "noxdg.events"
APP_LOG_NAME = "noxdg.log"
EVENTS_LOG_NAME = "noxdg_events.log"

# Marks handlers installed here so a repeated setup replaces them.
_OWNED_ATTR = "_noxdg_owned"


def _safe_mkdir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False


def _rotating_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=1_000_000,
        backupCount=2,
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED_ATTR, True)
    return handler


def _drop_owned_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED_ATTR, False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    """Route launcher diagnostics to stderr and, when configured, to rotating log files."""
    verbose = config.is_verbose(environ)
    app_logger = logging.getLogger(APP_LOGGER)
    event_logger = logging.getLogger(EVENTS_LOGGER)
    _drop_owned_handlers(app_logger)
    _drop_owned_handlers(event_logger)

    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = False

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: List[logging.Handler] = [stderr_handler]

    # Events are JSON lines for the log file only; never echo them on stderr.
    event_logger.setLevel(logging.INFO)
    event_logger.propagate = False

    directory = config.log_dir(environ)
    if directory is not None and _safe_mkdir(directory):
        handlers.append(_rotating_handler(directory / APP_LOG_NAME))
        event_logger.addHandler(_own(_rotating_handler(directory / EVENTS_LOG_NAME)))

    for handler in handlers:
        app_logger.addHandler(_own(handler))
