"""Background write queue for snapshots.

Mutators submit the full current snapshot and return immediately. A single
worker task writes the latest submitted payload; writes never overlap and a
payload superseded before it is written is skipped. A failed write stays
pending and is attempted again on the next submit or flush (at-least-once).
"""

from __future__ import annotations

import asyncio
import logging

from zenfit.kernel.store import StateStore

logger = logging.getLogger(__name__)


class PersistenceQueue:
    def __init__(self, store: StateStore) -> None:
        self._store = store
        self._payload: str | None = None
        self._seq = 0
        self._worker: asyncio.Task[None] | None = None
        self._closed = False
        self.writes = 0
        self.failures = 0
        self.last_error: str | None = None

    @property
    def pending(self) -> bool:
        return self._payload is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, payload: str) -> None:
        """Queue `payload` as the newest snapshot. Must run inside the event loop."""
        if self._closed:
            raise RuntimeError("persistence queue is closed")
        self._payload = payload
        self._seq += 1
        self._kick()

    def _kick(self) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        while self._payload is not None:
            seq, payload = self._seq, self._payload
            try:
                ok = await self._store.save(payload)
            except Exception:  # store contract is to report, not raise
                logger.exception("State store raised while saving snapshot #%d", seq)
                ok = False
            if ok:
                self.writes += 1
                self.last_error = None
                if seq == self._seq:
                    self._payload = None
                continue

            self.failures += 1
            self.last_error = f"save failed for snapshot #{seq}"
            if seq == self._seq:
                logger.warning("Snapshot #%d not persisted; will retry on next change", seq)
                return
            # A newer snapshot arrived while this one was being written

    async def flush(self) -> bool:
        """Wait for the worker; retry once if a failed payload is still pending.

        Returns True when nothing is left to write.
        """
        if self._worker is not None and not self._worker.done():
            await self._worker
        if self._payload is not None:
            self._kick()
            await self._worker
        return self._payload is None

    async def close(self) -> bool:
        ok = await self.flush()
        self._closed = True
        if not ok:
            logger.error("Closing with an unsaved snapshot (%s)", self.last_error)
        return ok
