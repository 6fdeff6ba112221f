"""JSON event records for one launcher run, written to the ``noxdg.events`` logger."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

event_logger = logging.getLogger("noxdg.events")

MAX_FIELD_CHARS = 500


def new_run_id() -> str:
    """Return a 12-character hex id shared by every event of one run."""
    return uuid.uuid4().hex[:12]


def clip(value: Any, limit: int = MAX_FIELD_CHARS) -> Any:
    """Shorten long strings, leaving other values untouched."""
    if not isinstance(value, str) or len(value) <= limit:
        return value
    return value[:limit] + f"...(+{len(value) - limit})"


def log_event(event: str, run_id: str, **fields: Any) -> None:
    record = {"event": event, "run_id": run_id}
    record.update((key, clip(val)) for key, val in fields.items())
    event_logger.info(json.dumps(record, default=str))
