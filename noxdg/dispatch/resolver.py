"""
Rule-based resolution of a target (path or URL) to a command line.

Stages, first hit wins:
1. protocol prefix such as ``https://`` looked up in the lookup table
2. MIME type reported by the probe, looked up in the lookup table
3. file extension, looked up in the lookup table
4. regular expressions from the ``patterns`` table, in declaration order
"""

from __future__ import annotations

import logging
import os
import re
from typing import Callable, Mapping, Optional, Tuple

from noxdg.dispatch.mime import detect_mime
from noxdg.errors import MimeDetectionError, ResolutionNotFound
from noxdg.rules.loader import Rules

logger = logging.getLogger(__name__)

PROTOCOL_PATTERN = re.compile(r"^([a-z]+://)")

# App names whose command can come from an environment variable of the same name, uppercased.
ENV_OVERRIDABLE = frozenset({"browser", "editor"})

# Placeholder for the target; the launcher passes the target as the shell's $0.
TARGET_PLACEHOLDER = "$0"

MimeProbe = Callable[[str], str]


def file_extension(target: str) -> str:
    """Return the suffix from the last dot of the final path element, dot included."""
    base = target.rsplit("/", 1)[-1]
    idx = base.rfind(".")
    if idx < 0:
        return ""
    return base[idx:]


def find_app_name(
    target: str,
    rules: Rules,
    *,
    mime_probe: Optional[MimeProbe] = None,
) -> Tuple[str, bool]:
    """Return ``(app_name, True)`` for the first matching rule, ``("", False)`` otherwise."""
    match = PROTOCOL_PATTERN.match(target)
    if match:
        protocol = match.group(1)
        app_name = rules.lookup.get(protocol)
        if app_name is not None:
            logger.debug("protocol %s -> %s", protocol, app_name)
            return app_name, True
        # An unknown protocol keeps going; the MIME probe will simply miss.
        logger.debug("protocol %s has no rule", protocol)

    probe = mime_probe or detect_mime
    try:
        mime = probe(target)
    except MimeDetectionError as exc:
        logger.debug("mime probe skipped: %s", exc)
    else:
        app_name = rules.lookup.get(mime)
        if app_name is not None:
            logger.debug("mime %s -> %s", mime, app_name)
            return app_name, True

    ext = file_extension(target)
    if ext:
        app_name = rules.lookup.get(ext)
        if app_name is not None:
            logger.debug("extension %s -> %s", ext, app_name)
            return app_name, True

    for pattern, app_name in rules.patterns:
        if pattern.search(target):
            logger.debug("pattern %s -> %s", pattern.pattern, app_name)
            return app_name, True

    return "", False


def resolve_app_name(
    app_name: str,
    rules: Rules,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Expand an app name into a command line."""
    if app_name in ENV_OVERRIDABLE:
        env = os.environ if environ is None else environ
        override = env.get(app_name.upper())
        if override:
            return f"{override} {TARGET_PLACEHOLDER}"

    return rules.applications.get(app_name, app_name)


def resolve(
    target: str,
    rules: Rules,
    *,
    mime_probe: Optional[MimeProbe] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[str, str]:
    """
    Return ``(app_name, command)`` for ``target``.

    Raises:
        ResolutionNotFound: no rule matches.
    """
    app_name, found = find_app_name(target, rules, mime_probe=mime_probe)
    if not found:
        raise ResolutionNotFound(target)
    return app_name, resolve_app_name(app_name, rules, environ)
