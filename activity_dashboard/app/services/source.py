from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..metrics import SOURCE_READS

logger = logging.getLogger(__name__)


class SourceFileError(Exception):
    """The activity data file could not be read or is not valid JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def read_activity_document(path: Path) -> Any:
    """Read and parse the activity JSON file; called on every request, no caching."""

    logger.debug("Looking for file at %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        SOURCE_READS.labels(result="unreadable").inc()
        logger.error("Error reading file %s: %s", path, exc)
        raise SourceFileError(path, str(exc)) from exc

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        SOURCE_READS.labels(result="invalid_json").inc()
        logger.error("Error parsing file %s: %s", path, exc)
        raise SourceFileError(path, f"invalid json: {exc}") from exc

    SOURCE_READS.labels(result="ok").inc()
    return document
