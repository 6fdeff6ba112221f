"""
Schema for the rules document (``~/.no-xdg-open``).

Recognized top-level tables, all mapping strings to strings:
- applications: {"<app name>": "<command template>"}.
- protocols: {"https://": "<app name>"}.
- mimes: {"application/pdf": "<app name>"}.
- extensions: {".pdf": "<app name>"}.
- patterns: {"<regular expression>": "<app name>"}.

Any other top-level key is ignored.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, StrictStr

LOOKUP_GROUPS = ("protocols", "mimes", "extensions")

StringTable = Dict[str, StrictStr]


class RulesDocument(BaseModel):
    """Validated view of a parsed rules document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    applications: StringTable = Field(
        default_factory=dict,
        description="App name to command template.",
    )
    protocols: StringTable = Field(
        default_factory=dict,
        description="Protocol prefix (including '://') to app name.",
    )
    mimes: StringTable = Field(
        default_factory=dict,
        description="MIME type to app name.",
    )
    extensions: StringTable = Field(
        default_factory=dict,
        description="File extension (including the dot) to app name.",
    )
    patterns: StringTable = Field(
        default_factory=dict,
        description="Regular expression to app name, tried in document order.",
    )
