"""
Live Data Refresher

Background service that keeps the LiveDataCache current.

Key responsibilities:
- Run every source adapter once at startup, then on a fixed interval
- Fan the adapters of one cycle out concurrently; their failures are independent
- Never let two cycles overlap (a cycle requested while one is running is skipped)
- Release the worker pool and HTTP session on shutdown

Runs in a background thread, refreshes every 15 seconds by default.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

import requests

from command_center.config import (
    FETCH_TIMEOUT_MS,
    NETWORK_META_URL,
    RATE_LIMIT_URL,
    REFRESH_INTERVAL_SECONDS,
    REGIONS_URL,
)
from command_center.live.adapters import NetworkAdapter, ServerAdapter, SourceAdapter, SystemAdapter
from command_center.live.cache import LiveDataCache

logger = logging.getLogger(__name__)


def default_adapters(session_factory=None, timeout_ms: int = FETCH_TIMEOUT_MS) -> List[SourceAdapter]:
    """The three stock sources: regions, network meta and rate limit."""
    return [
        ServerAdapter(REGIONS_URL, session_factory=session_factory, timeout_ms=timeout_ms),
        NetworkAdapter(NETWORK_META_URL, timeout_ms=timeout_ms),
        SystemAdapter(RATE_LIMIT_URL, timeout_ms=timeout_ms),
    ]


class LiveDataRefresher:
    """
    Refresh live cache slices from external sources.
    Runs in background thread.
    """

    def __init__(
        self,
        cache: LiveDataCache,
        adapters: Optional[Sequence[SourceAdapter]] = None,
        session_factory=None,
        interval_seconds: float = REFRESH_INTERVAL_SECONDS,
        http_session: Optional[requests.Session] = None,
    ):
        """
        Initialize the refresher.

        Args:
            cache: Cache slices to keep current (shared with the read endpoints)
            adapters: Sources to poll (defaults to the three stock adapters)
            session_factory: SQLAlchemy session factory, used for the server storage fallback
            interval_seconds: Delay between the end of one cycle and the start of the next
            http_session: requests session shared by the adapters
        """
        self.cache = cache
        self.adapters = list(adapters) if adapters is not None else default_adapters(session_factory)
        self.interval = interval_seconds

        self._session = http_session or requests.Session()
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, len(self.adapters)),
            thread_name_prefix="live-refresh",
        )
        self._cycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        logger.info(f"Live data refresher initialized: interval={interval_seconds}s, sources={len(self.adapters)}")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start refreshing in a background thread (first cycle runs immediately)"""
        if self.running:
            logger.warning("Live data refresher already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._refresh_loop, name="live-refresher", daemon=True)
        self._thread.start()

        logger.info("Live data refresher started")

    def stop(self):
        """Stop refreshing and release the worker pool and HTTP session"""
        self._stop_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._thread = None

        self._executor.shutdown(wait=False, cancel_futures=True)
        self._session.close()

        logger.info("Live data refresher stopped")

    def run_cycle(self) -> bool:
        """
        Run every adapter once, concurrently, and wait for all of them.

        Returns False without touching any adapter if another cycle is still
        in flight.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("Live refresh cycle still in progress; skipping this tick")
            return False
        try:
            futures = [
                self._executor.submit(adapter.run, self._session, self.cache)
                for adapter in self.adapters
            ]
            wait(futures)
            failed = sum(1 for f in futures if f.exception() is not None or f.result() is False)
            if failed:
                logger.info(f"Live refresh cycle finished: {len(futures) - failed} updated, {failed} failed")
            return True
        finally:
            self._cycle_lock.release()

    def _refresh_loop(self):
        """Main refresh loop (runs in background thread)"""
        while not self._stop_event.is_set():
            try:
                self.run_cycle()
            except Exception as e:
                logger.error(f"Live refresh error: {e}", exc_info=True)

            self._stop_event.wait(self.interval)
