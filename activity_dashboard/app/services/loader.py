from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from ..insights.views import MalformedSnapshot, sorted_dates
from ..metrics import POLL_RESULTS
from ..schemas.snapshot import ActivitySnapshot

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not load activity data"
POLLER_HEADER = "X-Activity-Poller"


class DataUnavailable(Exception):
    """Transport failure, non-success status or a body that is not JSON."""


@dataclass(frozen=True)
class Loaded:
    snapshot: ActivitySnapshot


@dataclass(frozen=True)
class Failed:
    reason: str
    kind: str
    message: str = LOAD_ERROR_MESSAGE


LoadResult = Loaded | Failed


class SnapshotLoader:
    """Fetch and validate the activity snapshot from a URL."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._clock = clock or time.time

    @property
    def url(self) -> str:
        return self._url

    async def fetch_snapshot(self) -> ActivitySnapshot:
        # The timestamp defeats intermediate caches of the static file.
        params = {"t": str(int(self._clock() * 1000))}
        try:
            response = await self._client.get(
                self._url, params=params, headers={POLLER_HEADER: "1"}
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DataUnavailable(f"transport error: {exc}") from exc

        if not response.is_success:
            raise DataUnavailable(f"unexpected status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DataUnavailable(f"invalid json: {exc}") from exc

        try:
            snapshot = ActivitySnapshot.model_validate(payload)
        except ValidationError as exc:
            raise MalformedSnapshot(f"schema violation: {exc.error_count()} error(s)") from exc

        sorted_dates(snapshot)
        return snapshot

    async def load(self) -> LoadResult:
        try:
            snapshot = await self.fetch_snapshot()
        except DataUnavailable as exc:
            return self._failed("unavailable", str(exc))
        except MalformedSnapshot as exc:
            return self._failed("malformed", str(exc))

        POLL_RESULTS.labels(result="loaded").inc()
        logger.debug(
            "Snapshot loaded",
            extra={"source": self._url, "extra_fields": {"days": len(snapshot.daily_stats)}},
        )
        return Loaded(snapshot)

    def _failed(self, kind: str, reason: str) -> Failed:
        POLL_RESULTS.labels(result=kind).inc()
        logger.warning(
            "Snapshot poll failed: %s",
            reason,
            extra={"source": self._url, "reason": kind},
        )
        return Failed(reason=reason, kind=kind)
