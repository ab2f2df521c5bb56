from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DATE_KEY_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class ClickCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    left: int = Field(..., ge=0)
    right: int = Field(..., ge=0)
    middle: int = Field(..., ge=0)

    @property
    def total(self) -> int:
        return self.left + self.right + self.middle


class DayRecord(BaseModel):
    """Counters recorded for a single calendar day."""

    model_config = ConfigDict(frozen=True)

    mouse_clicks: ClickCounts
    keyboard_presses: int = Field(..., ge=0)
    mouse_movement_pixels: int = Field(..., ge=0)
    sessions: tuple[Any, ...]


class ActivitySnapshot(BaseModel):
    """The full activity document as published by the data provider.

    ``daily_stats`` keys are zero-padded ISO dates, so sorting them as strings
    sorts them chronologically. Emptiness is not rejected here; the aggregator
    treats an empty mapping as a malformed snapshot.
    """

    model_config = ConfigDict(frozen=True)

    total_clicks: ClickCounts
    total_keys: int = Field(..., ge=0)
    total_mouse_movement_pixels: int = Field(..., ge=0)
    total_sessions: int = Field(..., ge=0)
    daily_stats: dict[str, DayRecord]

    @field_validator("daily_stats")
    @classmethod
    def _validate_date_keys(cls, value: dict[str, DayRecord]) -> dict[str, DayRecord]:
        for key in value:
            if not _DATE_KEY_RE.fullmatch(key):
                raise ValueError(f"date key {key!r} is not in YYYY-MM-DD form")
        return value
