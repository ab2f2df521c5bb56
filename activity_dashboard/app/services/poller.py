from __future__ import annotations

import asyncio
import logging

from .loader import SnapshotLoader
from .store import SnapshotStore, StoreStatus

logger = logging.getLogger(__name__)


class SnapshotPoller:
    """Repeating, cancellable fetch of the snapshot into the store.

    Every tick starts an independent fetch; a slow response does not delay the
    next tick. Whichever fetch finishes last wins.
    """

    def __init__(
        self,
        loader: SnapshotLoader,
        store: SnapshotStore,
        *,
        interval_seconds: float,
    ) -> None:
        self._loader = loader
        self._store = store
        self._interval = interval_seconds
        self._ticker: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[StoreStatus | None]] = set()

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def poll_once(self) -> StoreStatus:
        result = await self._loader.load()
        return await self._store.apply(result)

    def start(self) -> None:
        if self.running:
            return
        self._ticker = asyncio.create_task(self._run(), name="snapshot-poller")
        logger.info("Snapshot polling started every %.1fs from %s", self._interval, self._loader.url)

    async def stop(self) -> None:
        ticker = self._ticker
        self._ticker = None
        pending = [task for task in (ticker, *self._in_flight) if task is not None]
        for task in pending:
            task.cancel()
        # In-flight reads are idempotent; abandoning them is safe.
        await asyncio.gather(*pending, return_exceptions=True)
        self._in_flight.clear()
        if ticker is not None:
            logger.info("Snapshot polling stopped")

    async def _run(self) -> None:
        while True:
            task = asyncio.create_task(self._guarded_poll())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self._interval)

    async def _guarded_poll(self) -> StoreStatus | None:
        try:
            return await self.poll_once()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Unexpected error during snapshot poll")
            return None
