from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from ..metrics import SNAPSHOT_DAYS
from ..schemas.snapshot import ActivitySnapshot
from .loader import Failed, Loaded, LoadResult

logger = logging.getLogger(__name__)


class DashboardState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class StoreStatus:
    state: DashboardState
    snapshot: ActivitySnapshot | None = None
    error: str | None = None
    updated_at: datetime | None = None

    @property
    def renderable(self) -> ActivitySnapshot | None:
        """Snapshot to render, or None while loading or in the error state."""

        if self.state != DashboardState.READY:
            return None
        return self.snapshot


StoreListener = Callable[[StoreStatus], None]


@dataclass
class SnapshotStore:
    """Holds the latest load result; every result replaces the state wholesale."""

    _status: StoreStatus = field(
        default_factory=lambda: StoreStatus(DashboardState.LOADING),
    )
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)
    _listeners: list[StoreListener] = field(default_factory=list, init=False)
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(UTC))

    def add_listener(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    async def apply(self, result: LoadResult) -> StoreStatus:
        async with self._lock:
            if isinstance(result, Loaded):
                self._status = StoreStatus(
                    DashboardState.READY,
                    snapshot=result.snapshot,
                    updated_at=self.clock(),
                )
                SNAPSHOT_DAYS.set(len(result.snapshot.daily_stats))
            elif isinstance(result, Failed):
                # The previous snapshot is kept for inspection but is no
                # longer renderable until the next successful poll.
                self._status = StoreStatus(
                    DashboardState.ERROR,
                    snapshot=self._status.snapshot,
                    error=result.message,
                    updated_at=self.clock(),
                )
            else:
                raise TypeError(f"unsupported load result: {result!r}")
            status = self._status

        self._notify(status)
        return status

    async def get_status(self) -> StoreStatus:
        async with self._lock:
            return self._status

    def snapshot(self) -> StoreStatus:
        return self._status

    def _notify(self, status: StoreStatus) -> None:
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                logger.exception("Store listener %r failed", listener)
