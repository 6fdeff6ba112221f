"""Error types raised by the launcher pipeline."""

from __future__ import annotations


class NoXdgOpenError(Exception):
    """Base class for all launcher errors."""


class ConfigError(NoXdgOpenError):
    """Raised when the rules document cannot be turned into rules."""


class ConfigReadError(ConfigError):
    """Raised when the rules document is missing or unreadable."""


class ConfigParseError(ConfigError, ValueError):
    """Raised when the rules document is malformed or holds invalid values."""


class ResolutionNotFound(NoXdgOpenError, LookupError):
    """Raised when no rule matches a target."""

    def __init__(self, target: str) -> None:
        super().__init__(f"Couldn't find a way to open {target}")
        self.target = target


class LaunchError(NoXdgOpenError):
    """Raised when the shell that starts the application cannot be run."""


class MimeDetectionError(NoXdgOpenError):
    """Raised when a target cannot be classified; callers treat it as a miss."""
