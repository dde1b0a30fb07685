"""Periodic re-evaluation of the dashboard chain.

The scheduler owns a list of recompute callbacks and invokes all of them on
every tick. Ticks come from a background thread on a fixed interval, or
immediately through ``trigger()`` (clock anchored, snapshot changed). Ticks
never overlap, and a failing callback is logged without stopping the others
or later ticks.
"""

import logging
import threading
from collections.abc import Callable

from orientation.conf import get_setting

logger = logging.getLogger(__name__)

RecomputeCallback = Callable[[int], None]


class RefreshScheduler:
    """Drives recompute callbacks on a fixed period until stopped."""

    def __init__(self, interval: float | None = None) -> None:
        if interval is None:
            interval = get_setting("REFRESH_INTERVAL_SECONDS")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._callbacks: list[RecomputeCallback] = []
        self._tick_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._tick_count = 0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def register(self, callback: RecomputeCallback) -> None:
        self._callbacks.append(callback)

    def unregister(self, callback: RecomputeCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def tick(self) -> int:
        """Run every callback once with the new tick number and return it."""
        with self._tick_lock:
            self._tick_count += 1
            tick = self._tick_count
            for callback in list(self._callbacks):
                try:
                    callback(tick)
                except Exception:
                    logger.exception("Refresh callback %r failed on tick %d", callback, tick)
            return tick

    def trigger(self) -> None:
        """Request an immediate tick.

        With the loop running the tick happens on the scheduler thread;
        otherwise it runs synchronously in the caller.
        """
        if self.is_running:
            self._wake_event.set()
        else:
            self.tick()

    def start(self) -> None:
        if self.is_running:
            logger.warning("Refresh scheduler is already running.")
            return
        self._stop_event.clear()
        self._wake_event.clear()
        self._thread = threading.Thread(target=self._run, name="orientation-refresh", daemon=True)
        self._thread.start()
        logger.info("Refresh scheduler started (every %.1fs).", self.interval)

    def stop(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        self._wake_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("Refresh scheduler stopped.")

    def _run(self) -> None:
        self.tick()
        while not self._stop_event.is_set():
            self._wake_event.wait(self.interval)
            self._wake_event.clear()
            if self._stop_event.is_set():
                break
            self.tick()

    def __enter__(self) -> "RefreshScheduler":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
