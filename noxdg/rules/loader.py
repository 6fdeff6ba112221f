"""
Load the rules document into lookup tables used by the resolver.

Errors surface as ConfigReadError (cannot read the file) or ConfigParseError
(bad TOML, a group that is not a table, a non-string value, a bad regex).
"""

from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from pydantic import ValidationError

from noxdg.errors import ConfigParseError, ConfigReadError
from noxdg.rules.schema import LOOKUP_GROUPS, RulesDocument

logger = logging.getLogger(__name__)

NON_STRING_MESSAGE = "Configuration values must be strings"


@dataclass(frozen=True)
class Rules:
    """Immutable lookup tables built once per run."""

    applications: Mapping[str, str] = field(default_factory=dict)
    lookup: Mapping[str, str] = field(default_factory=dict)
    patterns: Tuple[Tuple[re.Pattern[str], str], ...] = ()


def _describe_validation_error(exc: ValidationError) -> str:
    for error in exc.errors():
        loc = error.get("loc") or ()
        if len(loc) == 1 and error.get("type") == "dict_type":
            return f"'{loc[0]}' must be a table"
    return NON_STRING_MESSAGE


def _compile_patterns(table: Mapping[str, str]) -> Tuple[Tuple[re.Pattern[str], str], ...]:
    compiled = []
    for pattern, app_name in table.items():
        try:
            compiled.append((re.compile(pattern), app_name))
        except re.error as exc:
            raise ConfigParseError(f"invalid pattern {pattern!r}: {exc}") from exc
    return tuple(compiled)


def build_rules(data: Mapping[str, Any]) -> Rules:
    """
    Turn a parsed document into Rules.

    The lookup groups are merged in the order they appear in ``data`` so a key
    repeated across groups keeps the value from the group declared last.
    """
    try:
        document = RulesDocument.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigParseError(_describe_validation_error(exc)) from exc

    lookup: Dict[str, str] = {}
    for group in data:
        if group in LOOKUP_GROUPS:
            lookup.update(getattr(document, group))

    return Rules(
        applications=dict(document.applications),
        lookup=lookup,
        patterns=_compile_patterns(document.patterns),
    )


def load_rules(path: Path | str) -> Rules:
    """Read and validate the rules document at ``path``."""
    path = Path(path)
    try:
        with open(path, "rb") as fp:
            data = tomllib.load(fp)
    except OSError as exc:
        raise ConfigReadError(exc.strerror or str(exc)) from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigParseError(str(exc)) from exc

    rules = build_rules(data)
    logger.debug(
        "Loaded %s: %d applications, %d lookup keys, %d patterns",
        path,
        len(rules.applications),
        len(rules.lookup),
        len(rules.patterns),
    )
    return rules
