"""Time-bounded in-memory cache of component records."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence

from componentfinder.errors import RefreshFailure
from componentfinder.models import CacheSnapshot, ComponentRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60.0

Loader = Callable[[], Awaitable[Sequence[ComponentRecord]]]


class ComponentCache:
    """Owns the current :class:`CacheSnapshot` and decides when to rebuild it.

    Readers get the snapshot object itself; snapshots are immutable and are
    swapped in one assignment, so a reader never sees a half-built state.
    Concurrent refresh requests share a single in-flight rebuild.
    """

    def __init__(
        self,
        loader: Loader,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self.ttl = ttl
        self._clock = clock
        self._snapshot = CacheSnapshot()
        self._inflight: Optional[asyncio.Task[CacheSnapshot]] = None

    def _is_fresh(self, snapshot: CacheSnapshot) -> bool:
        if snapshot.is_empty or snapshot.timestamp is None:
            return False
        return self._clock() - snapshot.timestamp < self.ttl

    async def get(self, force_refresh: bool = False) -> CacheSnapshot:
        snapshot = self._snapshot
        if not force_refresh and self._is_fresh(snapshot):
            LOGGER.debug("Serving %d cached components", len(snapshot.records))
            return snapshot
        return await self._refresh()

    async def _refresh(self) -> CacheSnapshot:
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._rebuild())
        else:
            LOGGER.debug("Joining refresh already in progress")
        # Shielded so one waiter going away does not cancel the shared rebuild.
        return await asyncio.shield(self._inflight)

    async def _rebuild(self) -> CacheSnapshot:
        LOGGER.info("Loading components from the remote repository...")
        try:
            records = await self._loader()
        except RefreshFailure:
            LOGGER.error("Refresh failed, keeping previous snapshot")
            raise
        except Exception as exc:
            LOGGER.exception("Refresh failed, keeping previous snapshot")
            raise RefreshFailure(str(exc) or type(exc).__name__) from exc
        finally:
            self._inflight = None

        snapshot = CacheSnapshot(records=tuple(records), timestamp=self._clock())
        self._snapshot = snapshot
        LOGGER.info("Loaded %d components", len(snapshot.records))
        return snapshot
